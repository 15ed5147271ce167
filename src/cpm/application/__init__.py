"""
Application Layer

Use Case와 포트 정의
"""
