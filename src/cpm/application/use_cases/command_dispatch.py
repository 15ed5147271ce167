"""
명령 디스패치 Use Case

설정된 모든 프로바이더에 같은 명령(install, publish 등)을 순서대로 전달합니다.
"""

from typing import Any, List, Mapping, Optional, Union

from ..ports import IProviderRegistry
from ...domain.models import ConfigDocument, ProviderCommand
from ...infrastructure.logging import get_logger

logger = get_logger(__name__, component="CommandDispatcher")


class CommandDispatcher:
    """
    프로바이더 명령 팬아웃

    - providers 순서대로 한 번에 하나씩 await
    - 해당 명령이 없는 프로바이더는 건너뜀
    - 예외는 변환하지 않음: 처음 실패한 프로바이더에서 중단되고 그대로 전파
    """

    def __init__(self, registry: IProviderRegistry):
        """
        Args:
            registry: 프로바이더 레지스트리
        """
        self.registry = registry

    async def run_command(
        self,
        doc: ConfigDocument,
        method: Union[ProviderCommand, str],
        opts: Optional[Mapping[str, Any]] = None
    ) -> List[str]:
        """
        모든 프로바이더에 명령 실행

        Args:
            doc: 설정 문서
            method: 명령 이름
            opts: 명령 옵션 (예: {"package": "foo"})

        Returns:
            명령이 호출된 프로바이더 식별자 목록
        """
        command = method.value if isinstance(method, ProviderCommand) else method
        options = dict(opts or {})
        invoked: List[str] = []

        for loaded in self.registry.resolve(doc):
            handler = loaded.provider.commands().get(command)
            if not callable(handler):
                logger.debug("Provider has no handler", provider_id=loaded.id, command=command)
                continue

            logger.info("Dispatching command", provider_id=loaded.id, command=command)
            await handler(options)
            invoked.append(loaded.id)

        logger.info("Command finished", command=command, providers=invoked)
        return invoked

    async def install(self, doc: ConfigDocument, opts: Optional[Mapping[str, Any]] = None) -> List[str]:
        return await self.run_command(doc, ProviderCommand.INSTALL, opts)

    async def publish(self, doc: ConfigDocument, opts: Optional[Mapping[str, Any]] = None) -> List[str]:
        return await self.run_command(doc, ProviderCommand.PUBLISH, opts)

    async def unpublish(self, doc: ConfigDocument, opts: Optional[Mapping[str, Any]] = None) -> List[str]:
        return await self.run_command(doc, ProviderCommand.UNPUBLISH, opts)

    async def uninstall(self, doc: ConfigDocument, opts: Optional[Mapping[str, Any]] = None) -> List[str]:
        return await self.run_command(doc, ProviderCommand.UNINSTALL, opts)

    async def version(self, doc: ConfigDocument, opts: Optional[Mapping[str, Any]] = None) -> List[str]:
        return await self.run_command(doc, ProviderCommand.VERSION, opts)

    async def update(self, doc: ConfigDocument, opts: Optional[Mapping[str, Any]] = None) -> List[str]:
        return await self.run_command(doc, ProviderCommand.UPDATE, opts)

    async def init(self, doc: ConfigDocument, opts: Optional[Mapping[str, Any]] = None) -> List[str]:
        return await self.run_command(doc, ProviderCommand.INIT, opts)
