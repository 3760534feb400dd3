"""描画パスの中核（ヘッドレス）。"""
