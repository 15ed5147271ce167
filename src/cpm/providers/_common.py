"""
내장 프로바이더 공통 구현

토큰이 있어야 활성화되는 boolean 설정과, 로그만 남기는 명령 테이블을 제공합니다.
"""

from dataclasses import dataclass
from functools import partial
from typing import Any, Dict, List, Mapping, Optional, Tuple

import httpx

from .. import __version__
from ..domain.models import (
    CommandHandler,
    Provider,
    ProviderCommand,
    SettingDescriptor,
    SettingKind,
    decode_value,
)
from ..infrastructure.logging import get_logger

logger = get_logger(__name__, component="BuiltinProvider")

HTTP_TIMEOUT = 10.0


@dataclass(frozen=True)
class GatedSetting:
    """토큰이 필요한 boolean 설정 정의"""
    key: str
    label: str
    default: bool
    help: str


def require_token(help_text: str):
    """
    토큰 없이 True로 바꾸려는 변경을 거부하는 콜백 생성

    Args:
        help_text: 거부 사유

    Returns:
        (next_value, settings, doc, scope) -> True | str
    """
    def callback(next_value: Any, settings: Mapping[str, Any], doc: Any, scope: str):
        if next_value is True and not settings.get("token"):
            return help_text
        return True
    return callback


class TokenGatedProvider(Provider):
    """
    토큰 + 토큰 의존 설정을 가진 내장 프로바이더 기본 클래스

    Attributes:
        name: 표시 이름
        registry_url: 패키지 레지스트리 URL
        gated_settings: 토큰이 있어야 활성화되는 설정들
    """

    registry_url: Optional[str] = None
    gated_settings: Tuple[GatedSetting, ...] = ()

    def menu(self, settings: Mapping[str, Any]) -> List[SettingDescriptor]:
        token_set = bool(settings.get("token"))
        descriptors = [
            SettingDescriptor(
                key="token",
                label="Token",
                kind=SettingKind.SECRET,
                value=settings.get("token"),
            )
        ]
        for gated in self.gated_settings:
            descriptors.append(
                SettingDescriptor(
                    key=gated.key,
                    label=gated.label,
                    value=decode_value(settings.get(gated.key)),
                    enabled=token_set,
                    default=gated.default,
                    help=gated.help if not token_set and settings.get(gated.key) else None,
                    callback=require_token(gated.help),
                )
            )
        return descriptors

    def commands(self) -> Dict[str, CommandHandler]:
        return {command.value: partial(self._run, command) for command in ProviderCommand}

    async def _run(self, command: ProviderCommand, opts: Mapping[str, Any]) -> None:
        logger.info(
            "Provider command invoked",
            provider=self.name,
            command=command.value,
            options=sorted(opts or {})
        )

    def version(self) -> Optional[str]:
        return __version__

    def registry(self) -> Optional[str]:
        return self.registry_url


async def fetch_json(
    url: str,
    token: Optional[str] = None,
    client: Optional[httpx.AsyncClient] = None
) -> Tuple[Optional[httpx.Response], Any]:
    """
    GET 요청 후 (응답, JSON 본문) 반환

    토큰이 있으면 먼저 인증 요청을 보내고, 실패하면 비인증 요청으로 재시도합니다.

    Args:
        url: 요청 URL
        token: Bearer 토큰 (선택)
        client: 재사용할 클라이언트 (None이면 임시 생성)

    Returns:
        (마지막 응답, JSON 본문 또는 None)

    Raises:
        httpx.HTTPError: 네트워크 오류
    """
    owns_client = client is None
    if owns_client:
        client = httpx.AsyncClient(timeout=HTTP_TIMEOUT)

    try:
        if token:
            response = await client.get(url, headers={"Authorization": f"Bearer {token}"})
            data = _json_or_none(response)
            if response.is_success and data:
                return response, data
            logger.debug("Authenticated lookup failed, retrying anonymously", url=url)

        response = await client.get(url)
        return response, _json_or_none(response)
    finally:
        if owns_client:
            await client.aclose()


def _json_or_none(response: httpx.Response) -> Any:
    try:
        return response.json()
    except ValueError:
        return None


__all__ = [
    "GatedSetting",
    "TokenGatedProvider",
    "require_token",
    "fetch_json",
]
