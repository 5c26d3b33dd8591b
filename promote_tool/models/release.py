# promote_tool/models/release.py
"""Release models for the promotion tool"""

from dataclasses import dataclass, field
from pathlib import Path
from typing import List, Dict, Any, Optional

from ..constants import RELEASE_TAG_PATTERN, ARCHIVE_SUFFIX
from ..api.exceptions import InvalidReleaseTagError


@dataclass(frozen=True)
class ReleaseTag:
    """Validated release tag of the form v<major>.<minor>.<patch>-build.<n>"""
    value: str

    def __post_init__(self):
        if not isinstance(self.value, str) or not RELEASE_TAG_PATTERN.fullmatch(self.value):
            raise InvalidReleaseTagError(str(self.value))

    @classmethod
    def parse(cls, tag) -> 'ReleaseTag':
        """Create from a string, passing existing tags through"""
        if isinstance(tag, ReleaseTag):
            return tag
        return cls(tag)

    @property
    def version_id(self) -> str:
        """Platform version id: leading 'v' dropped, dots replaced by dashes

        v1.2.3-build.4 -> 1-2-3-build-4
        """
        return self.value[1:].replace('.', '-')

    def __str__(self) -> str:
        return self.value


@dataclass(frozen=True)
class Asset:
    """Downloadable artifact attached to a release"""
    name: str
    url: str
    size: int = 0

    @property
    def is_archive(self) -> bool:
        return self.name.endswith(ARCHIVE_SUFFIX)

    @property
    def directory_name(self) -> str:
        """Name of the extraction directory for this asset"""
        if self.is_archive:
            return self.name[:-len(ARCHIVE_SUFFIX)]
        return self.name

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'Asset':
        """Create from a repository API asset entry"""
        return cls(
            name=data['name'],
            url=data['url'],
            size=int(data.get('size') or 0)
        )


@dataclass
class Release:
    """Published release with its assets, in repository listing order"""
    tag: str
    assets: List[Asset] = field(default_factory=list)
    name: Optional[str] = None

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'Release':
        return cls(
            tag=data.get('tag_name', ''),
            name=data.get('name'),
            assets=[Asset.from_dict(a) for a in data.get('assets') or []]
        )


@dataclass
class AssetSet:
    """Assets selected for a set of services"""
    tag: ReleaseTag
    services: List[str]
    assets: List[Asset] = field(default_factory=list)
    service_assets: Dict[str, List[Asset]] = field(default_factory=dict)

    @property
    def total_bytes(self) -> int:
        return sum(asset.size for asset in self.assets)

    def __len__(self) -> int:
        return len(self.assets)


@dataclass
class StagingTree:
    """Filesystem area for one (environment, tag) pair

    root/
    ├── <repo>-<package>-<tag>/   extracted service artifacts
    ├── .temp/                    in-flight downloads
    └── archives/                 downloaded archives awaiting extraction
    """
    environment: str
    tag: str
    root: Path
    temp_dir: Path
    archives_dir: Path

    def asset_dir(self, asset: Asset) -> Path:
        return self.root / asset.directory_name
