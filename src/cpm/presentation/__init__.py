"""
Presentation Layer

click 기반 CLI와 rich 기반 대화형 설정 메뉴
"""
