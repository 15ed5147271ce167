"""
저장소 정보 레지스트리

프로바이더가 저장소 조회 함수를 이름으로 등록하고,
다른 프로바이더나 CLI가 이름으로 조회할 수 있게 합니다.
"""

import inspect
from typing import Any, Callable, Dict, List, Optional

from ..logging import get_logger

logger = get_logger(__name__, component="RepoInfoRegistry")

# 저장소 조회 함수: (*args, **kwargs) -> dict (동기 또는 코루틴)
RepoInfoFunction = Callable[..., Any]


class RepoInfoRegistry:
    """
    이름 -> 저장소 조회 함수 레지스트리

    Example:
        >>> registry = RepoInfoRegistry()
        >>> registry.register("github-npm", fetch_github_repo)
        >>> info = await registry.info("github-npm", "octo/hello")
    """

    def __init__(self):
        self._functions: Dict[str, RepoInfoFunction] = {}

    def register(self, name: str, info_fn: RepoInfoFunction) -> None:
        """
        조회 함수 등록 (같은 이름이면 덮어씀)

        Args:
            name: 프로바이더 이름 (예: "github-npm")
            info_fn: 저장소 조회 함수
        """
        self._functions[name] = info_fn
        logger.debug("Repo info function registered", name=name)

    def names(self) -> List[str]:
        """등록된 이름 목록"""
        return list(self._functions)

    async def info(self, name: str, *args: Any, **kwargs: Any) -> Optional[Dict[str, Any]]:
        """
        저장소 정보 조회

        Args:
            name: 프로바이더 이름
            *args, **kwargs: 조회 함수에 그대로 전달

        Returns:
            조회 결과 (등록되지 않은 이름이면 None)
        """
        info_fn = self._functions.get(name)
        if info_fn is None:
            return None
        result = info_fn(*args, **kwargs)
        if inspect.isawaitable(result):
            result = await result
        return result


# 프로세스 공용 인스턴스 (내장 프로바이더가 import 시 등록)
repo_registry = RepoInfoRegistry()
