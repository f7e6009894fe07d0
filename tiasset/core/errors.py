from __future__ import annotations


class AssetBuildError(RuntimeError):
    """Base class for every failure raised while building an asset."""


class SerialError(AssetBuildError):
    pass


class DefinitionError(AssetBuildError):
    pass


class ImageLoadError(AssetBuildError):
    pass


class ConfigError(AssetBuildError):
    pass
