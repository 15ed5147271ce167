"""
GitHub 프로바이더 (@builtin/cpm-github)

설정: token, publish, releases
"""

from ._common import GatedSetting, TokenGatedProvider


class GitHubProvider(TokenGatedProvider):
    """GitHub 저장소 및 릴리스 프로바이더"""

    name = "GitHub"
    registry_url = "https://github.com"
    gated_settings = (
        GatedSetting("publish", "Publish", True, "A token is required to enable publishing."),
        GatedSetting("releases", "Releases", False, "A token is required to enable releases."),
    )


provider = GitHubProvider()
