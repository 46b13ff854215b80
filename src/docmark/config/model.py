# topmark:header:start
#
#   project      : DocMark
#   file         : model.py
#   file_relpath : src/docmark/config/model.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Configuration model and merge policy.

This module defines:
    - `Config`: the immutable runtime snapshot threaded through every scan.
    - `MutableConfig`: the builder used while loading and merging layers; it
      is frozen into a `Config` (validating annotations on the way) and can
      be thawed back for edits.

Layers, lowest to highest precedence:
    1. The bundled ``docmark-default.toml``.
    2. Project files discovered upward from the anchor directory, root-most
       first; within one directory ``pyproject.toml`` (``[tool.docmark]``)
       precedes ``docmark.toml``. A file with ``root = true`` stops discovery.
    3. Files passed explicitly with ``--config``, in the given order.
    4. CLI / API overrides (`MutableConfig.apply_cli_args`).

Annotations merge key-wise (later layers override individual tags); every
other field is last-wins. Manifest-derived annotations are resolved at
`MutableConfig.freeze` time and sit underneath the configured ones.
"""

from __future__ import annotations

from collections.abc import Iterable, Mapping
from dataclasses import dataclass, field
from pathlib import Path
from typing import TYPE_CHECKING, Any

from docmark.config.io import (
    get_bool_value_or_none,
    get_string_list_or_none,
    get_string_value_or_none,
    get_table_value,
    load_defaults_dict,
    load_toml_dict,
)
from docmark.config.logging import get_logger
from docmark.config.types import Separate, StructureKind
from docmark.constants import DOCMARK_TOML_NAME, PYPROJECT_TOML_NAME, RULE_NAME
from docmark.errors import ConfigError
from docmark.manifest import annotations_from_manifest
from docmark.tags.model import TagSet
from docmark.tags.validator import validate_tags

if TYPE_CHECKING:
    from docmark.config.io import TomlTable
    from docmark.config.logging import DocmarkLogger
    from docmark.config.types import ArgsLike
    from docmark.tokens.model import TokenKind

logger: DocmarkLogger = get_logger(__name__)

ALL_STRUCTURES: frozenset[StructureKind] = frozenset(StructureKind)

CLI_OVERRIDE_STR = "<CLI overrides>"


# ------------------ Immutable runtime config ------------------


@dataclass(frozen=True, slots=True)
class Config:
    """Immutable runtime configuration for DocMark.

    Build one with `MutableConfig.freeze` (after layered loading) or with
    `Config.create` for programmatic use. Defaults describe the fixer
    profile: merge into existing blocks, no extra separation, no name line.

    Attributes:
        annotations (TagSet): Validated tags written to every doc block, in order.
        preserve_existing (bool): Merge into existing blocks (True) or replace them.
        separate (Separate): Blank-line separation around inserted blocks.
        add_structure_name (bool): Emit the declared name as the first block line.
        ensure_spacing (bool): Keep a line break between block and declaration.
        structures (frozenset[StructureKind]): Declaration kinds to document.
        manifest_path (Path | None): Manifest the annotations were derived from.
        include_patterns (tuple[str, ...]): Git-wildmatch patterns selecting files.
        exclude_patterns (tuple[str, ...]): Git-wildmatch patterns rejecting files.
        config_files (tuple[Path | str, ...]): Provenance of the merged layers.
    """

    annotations: TagSet = field(default_factory=TagSet)
    preserve_existing: bool = True
    separate: Separate = Separate.NONE
    add_structure_name: bool = False
    ensure_spacing: bool = True
    structures: frozenset[StructureKind] = ALL_STRUCTURES
    manifest_path: Path | None = None
    include_patterns: tuple[str, ...] = ()
    exclude_patterns: tuple[str, ...] = ()
    config_files: tuple[Path | str, ...] = ()

    @classmethod
    def create(
        cls,
        annotations: Mapping[str, Any],
        preserve_existing: bool = True,
        separate: Separate | str = Separate.BOTH,
        add_structure_name: bool = True,
        *,
        ensure_spacing: bool = True,
        structures: Iterable[StructureKind | str] | None = None,
    ) -> Config:
        """Validate ``annotations`` and build a config (generator profile defaults).

        Args:
            annotations (Mapping[str, Any]): Plain annotations (strings, lists of strings).
            preserve_existing (bool): Merge into existing blocks instead of replacing them.
            separate (Separate | str): Separation mode; strings are parsed.
            add_structure_name (bool): Emit the declared name as the first block line.
            ensure_spacing (bool): Keep a line break between block and declaration.
            structures (Iterable[StructureKind | str] | None): Declaration kinds;
                all four when None.

        Returns:
            Config: The frozen configuration.

        Raises:
            InvalidTagError: If an annotation name fails validation.
            ConfigError: If ``separate`` or a structure name is not supported.
        """
        validate_tags(annotations)
        return cls(
            annotations=_to_tagset(annotations),
            preserve_existing=preserve_existing,
            separate=Separate.parse(separate),
            add_structure_name=add_structure_name,
            ensure_spacing=ensure_spacing,
            structures=(
                ALL_STRUCTURES
                if structures is None
                else frozenset(StructureKind.parse(s) for s in structures)
            ),
        )

    @classmethod
    def from_manifest(
        cls,
        path: Path | str,
        additional: Mapping[str, Any] | None = None,
        preserve_existing: bool = True,
        separate: Separate | str = Separate.BOTH,
        add_structure_name: bool = True,
    ) -> Config:
        """Build a config whose annotations derive from a package manifest.

        ``additional`` annotations override the derived ``author``/``license``.

        Raises:
            ManifestError: If the manifest cannot be read or decoded.
            InvalidTagError: If an ``additional`` annotation fails validation.
        """
        draft = MutableConfig(
            annotations=dict(additional or {}),
            preserve_existing=preserve_existing,
            separate=Separate.parse(separate),
            add_structure_name=add_structure_name,
            manifest_path=Path(path),
        )
        return draft.freeze()

    @property
    def structure_kinds(self) -> frozenset[TokenKind]:
        """Token kinds of the configured declaration keywords."""
        return frozenset(s.token_kind for s in self.structures)

    def rule_options(self) -> dict[str, dict[str, Any]]:
        """Return the docblock options keyed by the rule name."""
        return {
            RULE_NAME: {
                "annotations": self.annotations.to_plain(),
                "preserve_existing": self.preserve_existing,
                "separate": self.separate.value,
                "add_structure_name": self.add_structure_name,
            }
        }

    def to_toml_dict(self) -> TomlTable:
        """Convert this config into a TOML-serializable dict.

        The manifest is not exported: its annotations are already resolved
        into ``[annotations]``.
        """
        return {
            "annotations": self.annotations.to_plain(),
            "docblock": {
                "preserve_existing": self.preserve_existing,
                "separate": self.separate.value,
                "add_structure_name": self.add_structure_name,
                "ensure_spacing": self.ensure_spacing,
                "structures": [s.value for s in StructureKind if s in self.structures],
            },
            "files": {
                "include_patterns": list(self.include_patterns),
                "exclude_patterns": list(self.exclude_patterns),
            },
        }

    def thaw(self) -> MutableConfig:
        """Return a mutable copy of this frozen config.

        The manifest path is not carried over since the annotations already
        hold what it contributed.
        """
        return MutableConfig(
            annotations=self.annotations.to_plain(),
            preserve_existing=self.preserve_existing,
            separate=self.separate,
            add_structure_name=self.add_structure_name,
            ensure_spacing=self.ensure_spacing,
            structures=[s for s in StructureKind if s in self.structures],
            include_patterns=list(self.include_patterns),
            exclude_patterns=list(self.exclude_patterns),
            config_files=list(self.config_files),
        )


def _to_tagset(annotations: Mapping[str, Any]) -> TagSet:
    try:
        return TagSet.from_mapping(annotations)
    except TypeError as exc:
        raise ConfigError(f"Invalid annotation value: {exc}") from exc


# -------------------------- Mutable builder --------------------------
@dataclass
class MutableConfig:
    """Mutable configuration used during discovery and merging.

    Scalar options are tri-state (``None`` = not set by this layer) so that
    `merge_with` can tell "unset" from an explicit value. Lists are empty
    when unset.

    Attributes:
        annotations (dict[str, Any]): Plain annotations from this layer, in order.
        preserve_existing (bool | None): See `Config.preserve_existing`.
        separate (Separate | None): See `Config.separate`.
        add_structure_name (bool | None): See `Config.add_structure_name`.
        ensure_spacing (bool | None): See `Config.ensure_spacing`.
        structures (list[StructureKind]): See `Config.structures`.
        manifest_path (Path | None): Manifest to derive annotations from at freeze time.
        include_patterns (list[str]): See `Config.include_patterns`.
        exclude_patterns (list[str]): See `Config.exclude_patterns`.
        config_files (list[Path | str]): Provenance of the merged layers.
        root (bool): True when this layer declares ``root = true``.
    """

    annotations: dict[str, Any] = field(default_factory=lambda: {})
    preserve_existing: bool | None = None
    separate: Separate | None = None
    add_structure_name: bool | None = None
    ensure_spacing: bool | None = None
    structures: list[StructureKind] = field(default_factory=lambda: [])
    manifest_path: Path | None = None
    include_patterns: list[str] = field(default_factory=lambda: [])
    exclude_patterns: list[str] = field(default_factory=lambda: [])
    config_files: list[Path | str] = field(default_factory=lambda: [])
    root: bool = False

    # ---------------------------- Build/freeze ----------------------------
    def freeze(self) -> Config:
        """Resolve the manifest, validate annotations and build a `Config`.

        Raises:
            ManifestError: If ``manifest_path`` is set and cannot be read.
            InvalidTagError: If an annotation name fails validation.
            ConfigError: If an annotation value cannot be represented.
        """
        annotations: dict[str, Any]
        if self.manifest_path is not None:
            annotations = annotations_from_manifest(self.manifest_path, self.annotations)
        else:
            annotations = dict(self.annotations)

        validate_tags(annotations)

        return Config(
            annotations=_to_tagset(annotations),
            preserve_existing=(
                True if self.preserve_existing is None else self.preserve_existing
            ),
            separate=self.separate or Separate.NONE,
            add_structure_name=bool(self.add_structure_name),
            ensure_spacing=True if self.ensure_spacing is None else self.ensure_spacing,
            structures=frozenset(self.structures) if self.structures else ALL_STRUCTURES,
            manifest_path=self.manifest_path,
            include_patterns=tuple(self.include_patterns),
            exclude_patterns=tuple(self.exclude_patterns),
            config_files=tuple(self.config_files),
        )

    # --------------------------- Loaders/parsers --------------------------
    @classmethod
    def from_defaults(cls) -> MutableConfig:
        """Load the bundled ``docmark-default.toml``."""
        draft: MutableConfig = cls.from_toml_dict(load_defaults_dict())
        draft.config_files = ["<defaults>"]
        return draft

    @classmethod
    def from_toml_dict(
        cls,
        data: TomlTable,
        config_file: Path | None = None,
    ) -> MutableConfig:
        """Parse one configuration layer.

        Args:
            data (TomlTable): The DocMark table (top level of ``docmark.toml``
                or ``[tool.docmark]``).
            config_file (Path | None): File the table came from; relative
                manifest paths are resolved against its directory.

        Returns:
            MutableConfig: The parsed layer.

        Raises:
            ConfigError: If an option holds an unsupported value.
        """
        draft = cls()
        draft.root = bool(data.get("root", False))

        annotations: TomlTable = get_table_value(data, "annotations")
        draft.annotations = dict(annotations)

        docblock: TomlTable = get_table_value(data, "docblock")
        draft.preserve_existing = get_bool_value_or_none(docblock, "preserve_existing")
        separate: str | None = get_string_value_or_none(docblock, "separate")
        if separate is not None:
            draft.separate = Separate.parse(separate)
        draft.add_structure_name = get_bool_value_or_none(docblock, "add_structure_name")
        draft.ensure_spacing = get_bool_value_or_none(docblock, "ensure_spacing")
        structures: list[str] | None = get_string_list_or_none(docblock, "structures")
        if structures is not None:
            draft.structures = [StructureKind.parse(s) for s in structures]

        manifest: TomlTable = get_table_value(data, "manifest")
        manifest_path: str | None = get_string_value_or_none(manifest, "path")
        if manifest_path:
            base: Path = config_file.parent if config_file is not None else Path.cwd()
            draft.manifest_path = (base / manifest_path).resolve()

        files: TomlTable = get_table_value(data, "files")
        draft.include_patterns = get_string_list_or_none(files, "include_patterns") or []
        draft.exclude_patterns = get_string_list_or_none(files, "exclude_patterns") or []

        return draft

    @classmethod
    def from_toml_file(cls, path: Path) -> MutableConfig | None:
        """Load one ``docmark.toml`` or ``pyproject.toml`` file.

        Returns:
            MutableConfig | None: The parsed layer, or None for a
                ``pyproject.toml`` without a ``[tool.docmark]`` table.

        Raises:
            ConfigError: If the file cannot be read or holds invalid values.
        """
        logger.debug("Creating MutableConfig from TOML config: %s", path)
        data: TomlTable = load_toml_dict(path)

        if path.name == PYPROJECT_TOML_NAME:
            section: TomlTable = get_table_value(get_table_value(data, "tool"), "docmark")
            if not section:
                logger.debug("No [tool.docmark] section in %s", path)
                return None
            data = section

        draft: MutableConfig = cls.from_toml_dict(data, config_file=path)
        draft.config_files = [path]
        return draft

    @classmethod
    def discover_local_config_files(cls, start: Path) -> list[Path]:
        """Return config files found walking upward from ``start``.

        Files are returned root-most first so that a left-to-right merge gives
        the nearest file the last word. Within one directory
        ``pyproject.toml`` comes before ``docmark.toml``. A file declaring
        ``root = true`` ends the walk after its directory.

        Args:
            start (Path): Anchor file or directory.

        Returns:
            list[Path]: Discovered files, root-most first.
        """
        per_dir: list[list[Path]] = []
        cur: Path = start.resolve()
        if cur.is_file():
            cur = cur.parent

        while True:
            stop_here = False
            entries: list[Path] = []
            for name in (PYPROJECT_TOML_NAME, DOCMARK_TOML_NAME):
                candidate: Path = cur / name
                if not candidate.is_file():
                    continue
                try:
                    layer: MutableConfig | None = cls.from_toml_file(candidate)
                except ConfigError as exc:
                    logger.warning("Ignoring unreadable config %s: %s", candidate, exc)
                    continue
                if layer is None:
                    continue
                logger.debug("Discovered config file: %s", candidate)
                entries.append(candidate)
                stop_here = stop_here or layer.root

            if entries:
                per_dir.append(entries)

            parent: Path = cur.parent
            if stop_here:
                logger.debug("Stopping upward config discovery at %s due to root=true", cur)
                break
            if parent == cur:
                break
            cur = parent

        ordered: list[Path] = []
        for entries in reversed(per_dir):
            ordered.extend(entries)
        return ordered

    @classmethod
    def load_merged(
        cls,
        *,
        input_paths: Iterable[Path] | None = None,
        extra_config_files: Iterable[Path] | None = None,
        no_config: bool = False,
    ) -> MutableConfig:
        """Discover and merge configuration layers into a draft.

        Args:
            input_paths (Iterable[Path] | None): Discovery anchor(s); the first one
                (or the CWD) is used.
            extra_config_files (Iterable[Path] | None): Explicit files merged after discovery.
            no_config (bool): Skip project discovery (explicit files still apply).

        Returns:
            MutableConfig: The merged draft, ready for CLI overrides and `freeze`.
        """
        draft: MutableConfig = cls.from_defaults()

        anchors: list[Path] = list(input_paths or ())
        anchor: Path = anchors[0] if anchors else Path.cwd()

        if not no_config:
            for path in cls.discover_local_config_files(anchor):
                layer: MutableConfig | None = cls.from_toml_file(path)
                if layer is not None:
                    draft = draft.merge_with(layer)

        for extra in extra_config_files or ():
            layer = cls.from_toml_file(Path(extra))
            if layer is None:
                raise ConfigError(f"No [tool.docmark] section in {extra}")
            draft = draft.merge_with(layer)

        return draft

    # ------------------------------- Merging -------------------------------
    def merge_with(self, other: MutableConfig) -> MutableConfig:
        """Return a new draft where values from ``other`` override this draft.

        Annotations are merged per tag; list-valued fields are replaced when
        ``other`` sets them; tri-state fields are replaced when not None.
        """
        return MutableConfig(
            annotations={**self.annotations, **other.annotations},
            preserve_existing=(
                other.preserve_existing
                if other.preserve_existing is not None
                else self.preserve_existing
            ),
            separate=other.separate if other.separate is not None else self.separate,
            add_structure_name=(
                other.add_structure_name
                if other.add_structure_name is not None
                else self.add_structure_name
            ),
            ensure_spacing=(
                other.ensure_spacing if other.ensure_spacing is not None else self.ensure_spacing
            ),
            structures=other.structures or self.structures,
            manifest_path=other.manifest_path or self.manifest_path,
            include_patterns=other.include_patterns or self.include_patterns,
            exclude_patterns=other.exclude_patterns or self.exclude_patterns,
            config_files=self.config_files + other.config_files,
            root=other.root,
        )

    def apply_cli_args(self, args: ArgsLike) -> MutableConfig:
        """Apply overrides from a CLI namespace or API mapping.

        Only keys present with a non-None value override. ``annotations``
        merge per tag; ``include_patterns``/``exclude_patterns`` extend the
        configured lists.

        Args:
            args (ArgsLike): Parsed arguments.

        Returns:
            MutableConfig: This draft, updated.

        Raises:
            ConfigError: If ``separate`` or a structure name is not supported.
        """
        logger.debug("Applying CLI arguments to MutableConfig: %s", args)
        self.config_files.append(CLI_OVERRIDE_STR)

        if args.get("annotations"):
            self.annotations = {**self.annotations, **args["annotations"]}
        if args.get("manifest_path") is not None:
            self.manifest_path = Path(args["manifest_path"]).resolve()

        for key in ("preserve_existing", "add_structure_name", "ensure_spacing"):
            if args.get(key) is not None:
                setattr(self, key, bool(args[key]))
        if args.get("separate") is not None:
            self.separate = Separate.parse(args["separate"])
        if args.get("structures"):
            self.structures = [StructureKind.parse(s) for s in args["structures"]]

        if args.get("include_patterns"):
            self.include_patterns.extend(args["include_patterns"])
        if args.get("exclude_patterns"):
            self.exclude_patterns.extend(args["exclude_patterns"])

        logger.debug("Patched MutableConfig: %s", self)
        return self
