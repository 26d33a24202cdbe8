"""週時間割自動生成エンジン

クラス・教科・教員の週当たり時数を、曜日×校時の時間割グリッドへ
貪欲法で配置する。
"""

__version__ = "1.0.0"
