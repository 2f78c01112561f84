"""Asset Encoder.

Turns the declared asset map into the payload the deployment API expects.
"""

import base64
import os
from collections.abc import Mapping
from pathlib import Path

from deno_deploy.core.exceptions import FileReadError, InvalidAssetError, NoAssetsError
from deno_deploy.models.assets import (
    AssetDescriptor,
    FileAsset,
    SymlinkAsset,
    WireFileAsset,
    WireSymlinkAsset,
    to_typed_asset,
)
from deno_deploy.utils.logging import get_logger

logger = get_logger(__name__)

WireAssetMap = dict[str, WireFileAsset | WireSymlinkAsset]


def encode_path(path: str, base_dir: str | os.PathLike[str] = ".") -> str:
    """Compute the wire key for a declared path.

    The path is resolved against ``base_dir``, made relative to it and
    lexically normalized, and every separator becomes ``/``. Case is kept.
    """
    text = os.fspath(path).replace("\\", "/")
    if not text:
        raise ValueError("empty path")
    base = os.fspath(base_dir)
    resolved = os.path.normpath(os.path.join(base, text))
    relative = os.path.relpath(resolved, os.path.normpath(base))
    return relative.replace(os.sep, "/").replace("\\", "/")


def encode_content(data: bytes) -> WireFileAsset:
    """Encode file bytes as UTF-8 text when possible, base64 otherwise."""
    try:
        return WireFileAsset(content=data.decode("utf-8"), encoding="utf8")
    except UnicodeDecodeError:
        return WireFileAsset(
            content=base64.b64encode(data).decode("ascii"),
            encoding="base64",
        )


def _read_file(path: str, asset: FileAsset, base_dir: str | os.PathLike[str]) -> bytes:
    if asset.content is not None:
        try:
            return asset.content.encode("utf-8")
        except UnicodeEncodeError as e:
            raise InvalidAssetError(path, f"inline content is not valid text: {e.reason}") from e

    location = Path(base_dir) / (asset.source if asset.source is not None else path)
    try:
        return location.read_bytes()
    except OSError as e:
        raise FileReadError(path, e.strerror or str(e)) from e


def encode_assets(
    assets: Mapping[str, AssetDescriptor],
    base_dir: str | os.PathLike[str] = ".",
) -> WireAssetMap:
    """Encode declared assets into their wire form.

    Args:
        assets: Declared assets keyed by path
        base_dir: Directory that relative paths are resolved against

    Returns:
        Wire assets keyed by normalized relative path

    Raises:
        NoAssetsError: If ``assets`` is empty
        InvalidAssetKindError: If an asset has an unsupported kind
        InvalidAssetError: If an asset's fields do not match its kind, its
            inline content cannot be encoded, or two paths share a key
        FileReadError: If a file's content cannot be read
    """
    if not assets:
        raise NoAssetsError()

    encoded: WireAssetMap = {}
    declared_paths: dict[str, str] = {}
    for path, descriptor in assets.items():
        typed = to_typed_asset(path, descriptor)
        try:
            key = encode_path(path, base_dir)
        except ValueError as e:
            raise InvalidAssetError(path, f"could not compute relative path: {e}") from e
        if key in declared_paths:
            raise InvalidAssetError(
                path, f"resolves to the same asset path as {declared_paths[key]}"
            )
        declared_paths[key] = path

        if isinstance(typed, SymlinkAsset):
            try:
                target = encode_path(typed.target, base_dir)
            except ValueError as e:
                raise InvalidAssetError(
                    path, f"could not compute relative target path: {e}"
                ) from e
            encoded[key] = WireSymlinkAsset(target=target)
        else:
            encoded[key] = encode_content(_read_file(path, typed, base_dir))

        logger.debug(
            "asset_encoder.encoded",
            path=key,
            kind=typed.kind,
            encoding=getattr(encoded[key], "encoding", None),
        )

    logger.info("asset_encoder.completed", asset_count=len(encoded))
    return encoded
