"""
cpm - 프로바이더 기반 패키지 매니저

패키지 작업(install/publish/version 등)을 GitHub, npm 등의
프로바이더 모듈에 위임하고, 전역/네임스페이스/프로바이더 계층 설정을 관리합니다.
"""

__version__ = "0.3.0"
