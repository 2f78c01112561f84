"""Asset data models.

Declared assets arrive as loosely typed :class:`AssetDescriptor` values keyed
by path. :func:`to_typed_asset` turns each one into a :class:`FileAsset` or
:class:`SymlinkAsset`, rejecting anything that does not fit its kind.
"""

from enum import Enum
from typing import Annotated, Literal, Union

from pydantic import BaseModel, ConfigDict, Field

from deno_deploy.core.exceptions import InvalidAssetError, InvalidAssetKindError


class AssetKind(str, Enum):
    """Kinds of asset a deployment can contain."""

    FILE = "file"
    SYMLINK = "symlink"


class AssetDescriptor(BaseModel):
    """A declared asset as supplied in the desired state."""

    kind: str
    # file
    content: str | None = None
    source: str | None = None
    git_sha1: str | None = None
    updated_at: str | None = None
    # symlink
    target: str | None = None


class FileAsset(BaseModel):
    """A regular file.

    Content comes from ``content`` (inline text), from ``source`` (a path to
    read), or, when both are unset, from the declared path itself.
    """

    model_config = ConfigDict(frozen=True)

    kind: Literal["file"] = "file"
    content: str | None = None
    source: str | None = None
    git_sha1: str | None = None
    updated_at: str | None = None


class SymlinkAsset(BaseModel):
    """A symbolic link to another asset path."""

    model_config = ConfigDict(frozen=True)

    kind: Literal["symlink"] = "symlink"
    target: str


def to_typed_asset(path: str, descriptor: AssetDescriptor) -> FileAsset | SymlinkAsset:
    """Convert a declared asset into its typed variant.

    Raises:
        InvalidAssetKindError: If ``kind`` is not ``file`` or ``symlink``
        InvalidAssetError: If the fields set do not belong to ``kind``
    """
    try:
        kind = AssetKind(descriptor.kind)
    except ValueError:
        raise InvalidAssetKindError(
            path, descriptor.kind, tuple(k.value for k in AssetKind)
        ) from None

    if kind is AssetKind.FILE:
        if descriptor.target is not None:
            raise InvalidAssetError(path, "`target` is valid only for kind == \"symlink\"")
        if descriptor.content is not None and descriptor.source is not None:
            raise InvalidAssetError(path, "only one of `content` and `source` may be set")
        return FileAsset(
            content=descriptor.content,
            source=descriptor.source,
            git_sha1=descriptor.git_sha1,
            updated_at=descriptor.updated_at,
        )

    if not descriptor.target:
        raise InvalidAssetError(path, "`target` is required for kind == \"symlink\"")
    stray = [
        name
        for name in ("content", "source", "git_sha1", "updated_at")
        if getattr(descriptor, name) is not None
    ]
    if stray:
        fields = ", ".join(f"`{name}`" for name in stray)
        raise InvalidAssetError(path, f"{fields} valid only for kind == \"file\"")
    return SymlinkAsset(target=descriptor.target)


class WireFileAsset(BaseModel):
    """File asset as sent to the API."""

    kind: Literal["file"] = "file"
    content: str
    encoding: Literal["utf8", "base64"]


class WireSymlinkAsset(BaseModel):
    """Symlink asset as sent to the API."""

    kind: Literal["symlink"] = "symlink"
    target: str


WireAsset = Annotated[Union[WireFileAsset, WireSymlinkAsset], Field(discriminator="kind")]
