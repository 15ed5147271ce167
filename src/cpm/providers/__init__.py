"""
내장 프로바이더

'@builtin/cpm-<name>' 식별자는 이 패키지의 <name> 모듈로 로드됩니다.
밑줄(_)로 시작하는 모듈은 프로바이더가 아닙니다.
"""
