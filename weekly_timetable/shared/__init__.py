"""共有コンポーネント"""
