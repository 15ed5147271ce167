"""
Domain Layer

설정 문서, 프로바이더 계약, 설정 리졸버, 에러 정의
"""
