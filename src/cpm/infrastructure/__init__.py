"""
Infrastructure Layer

설정 저장소, 프로바이더 레지스트리, 로깅
"""
