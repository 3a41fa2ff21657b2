"""
オーケストレーション層
"""
