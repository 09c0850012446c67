# topmark:header:start
#
#   project      : CogMark
#   file         : model.py
#   file_relpath : src/cogmark/config/model.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Configuration model and merge policy.

This module defines:
    - `Config`: an immutable, runtime snapshot passed by reference into every
      engine run. The engine never mutates it.
    - `MutableConfig`: a mutable builder used during discovery/merge; it
      can be frozen into `Config` and thawed back for edits.

Immutability:
    - `Config` stores tuples and is ``frozen=True`` so concurrent engine runs
      can share one instance without coordination. Use `Config.thaw` → edit →
      `MutableConfig.freeze` for safe updates.

Merge semantics:
    - Every builder field is tri-state (``None`` = not set by this layer).
    - `MutableConfig.merge_with` is last-wins over *set* values only.

Layering (lowest → highest precedence):
    defaults → user config → project configs (root-most → nearest) →
    explicit ``--config`` files → CLI overrides.
"""

from __future__ import annotations

import os
from collections.abc import Mapping
from dataclasses import dataclass, field
from pathlib import Path
from typing import TYPE_CHECKING, Any

from cogmark.config.io import (
    extract_cogmark_table,
    get_bool_checked,
    get_int_checked,
    get_string_checked,
    get_string_list_checked,
    get_table_value,
    load_defaults_dict,
    load_toml_dict,
)
from cogmark.config.keys import Toml
from cogmark.config.logging import get_logger
from cogmark.constants import (
    CONFIG_FILE_NAME,
    DEFAULT_ARGS,
    DEFAULT_COMMAND,
    DEFAULT_END_MARK,
    DEFAULT_EXT,
    DEFAULT_START_MARK,
    PYPROJECT_FILE_NAME,
)
from cogmark.core.diagnostics import Diagnostic, DiagnosticLog

if TYPE_CHECKING:
    from collections.abc import Iterable

    from cogmark.config.io import TomlTable
    from cogmark.config.logging import CogmarkLogger

# ArgsLike: generic mapping accepted by config loaders (works for CLI namespaces and API dicts).
ArgsLike = Mapping[str, Any]

logger: CogmarkLogger = get_logger(__name__)

CLI_OVERRIDE_STR = "<CLI overrides>"


@dataclass(frozen=True, slots=True)
class Config:
    """Immutable per-run settings consumed by the engine and the fan-out driver.

    Attributes:
        start_mark (str): Opening delimiter (``[[[``), glued to ``gocog`` and ``end``.
        end_mark (str): Closing delimiter (``]]]``).
        command (str): Generator interpreter; ``%s`` is replaced by the scratch file path.
        args (tuple[str, ...]): Interpreter arguments; ``%s`` is replaced in each item.
        ext (str): Suffix appended to the scratch generator file name.
        assume_end_at_eof (bool): Treat end of input as an implicit ``[[[end]]]``.
        excise (bool): Remove generated output without running any generator.
        serial (bool): Process files one after another (fan-out driver only).
        jobs (int | None): Worker count for parallel runs (None = executor default).
        verbosity_level (int): 0 = terse, 1+ = emit trace diagnostics.
        quiet (bool): Suppress non-error program output.
        config_files (tuple[Path | str, ...]): Provenance of merged layers.
        diagnostics (tuple[Diagnostic, ...]): Warnings raised while loading config.
    """

    start_mark: str = DEFAULT_START_MARK
    end_mark: str = DEFAULT_END_MARK
    command: str = DEFAULT_COMMAND
    args: tuple[str, ...] = DEFAULT_ARGS
    ext: str = DEFAULT_EXT
    assume_end_at_eof: bool = False
    excise: bool = False
    serial: bool = False
    jobs: int | None = None
    verbosity_level: int = 0
    quiet: bool = False
    config_files: tuple[Path | str, ...] = ()
    diagnostics: tuple[Diagnostic, ...] = ()

    @property
    def verbose(self) -> bool:
        """Return True when trace diagnostics should be produced."""
        return self.verbosity_level >= 1

    def to_toml_dict(self) -> TomlTable:
        """Return the effective configuration as a TOML-compatible table."""
        return {
            Toml.SECTION_MARKERS: {
                Toml.KEY_START: self.start_mark,
                Toml.KEY_END: self.end_mark,
            },
            Toml.SECTION_GENERATOR: {
                Toml.KEY_COMMAND: self.command,
                Toml.KEY_ARGS: list(self.args),
                Toml.KEY_EXT: self.ext,
            },
            Toml.SECTION_RUN: {
                Toml.KEY_ASSUME_END_AT_EOF: self.assume_end_at_eof,
                Toml.KEY_EXCISE: self.excise,
                Toml.KEY_SERIAL: self.serial,
                Toml.KEY_JOBS: self.jobs,
            },
        }

    def thaw(self) -> MutableConfig:
        """Return a mutable copy of this frozen config."""
        diagnostics = DiagnosticLog()
        diagnostics.extend(self.diagnostics)
        return MutableConfig(
            start_mark=self.start_mark,
            end_mark=self.end_mark,
            command=self.command,
            args=list(self.args),
            ext=self.ext,
            assume_end_at_eof=self.assume_end_at_eof,
            excise=self.excise,
            serial=self.serial,
            jobs=self.jobs,
            verbosity_level=self.verbosity_level,
            quiet=self.quiet,
            config_files=list(self.config_files),
            diagnostics=diagnostics,
        )


@dataclass
class MutableConfig:
    """Mutable configuration used during discovery and merging.

    All value fields default to ``None`` (unset) so that merging a sparse layer
    onto a richer one never clobbers explicitly configured values.
    """

    start_mark: str | None = None
    end_mark: str | None = None
    command: str | None = None
    args: list[str] | None = None
    ext: str | None = None
    assume_end_at_eof: bool | None = None
    excise: bool | None = None
    serial: bool | None = None
    jobs: int | None = None
    verbosity_level: int | None = None
    quiet: bool | None = None

    # Provenance
    config_files: list[Path | str] = field(default_factory=lambda: [])

    # Collected diagnostics while loading / merging config.
    diagnostics: DiagnosticLog = field(default_factory=DiagnosticLog)

    # ---------------------------- Build/freeze ----------------------------
    def freeze(self) -> Config:
        """Validate this builder and freeze it into an immutable `Config`.

        Unset fields fall back to the runtime defaults.

        Raises:
            ValueError: If a marker or the command is empty, or ``jobs`` < 1.
        """
        start_mark: str = self.start_mark if self.start_mark is not None else DEFAULT_START_MARK
        end_mark: str = self.end_mark if self.end_mark is not None else DEFAULT_END_MARK
        command: str = self.command if self.command is not None else DEFAULT_COMMAND

        if not start_mark or not end_mark:
            raise ValueError("Config invalid: start and end marks must not be empty.")
        if not command.strip():
            raise ValueError("Config invalid: the generator command must not be empty.")
        if self.jobs is not None and self.jobs < 1:
            raise ValueError(f"Config invalid: jobs must be >= 1 (got {self.jobs}).")

        return Config(
            start_mark=start_mark,
            end_mark=end_mark,
            command=command,
            args=tuple(self.args) if self.args is not None else DEFAULT_ARGS,
            ext=self.ext if self.ext is not None else DEFAULT_EXT,
            assume_end_at_eof=bool(self.assume_end_at_eof),
            excise=bool(self.excise),
            serial=bool(self.serial),
            jobs=self.jobs,
            verbosity_level=self.verbosity_level or 0,
            quiet=bool(self.quiet),
            config_files=tuple(self.config_files),
            diagnostics=tuple(self.diagnostics),
        )

    # --------------------------- Loaders/parsers --------------------------
    @classmethod
    def from_defaults(cls) -> MutableConfig:
        """Return a builder populated with the runtime defaults."""
        draft: MutableConfig = cls.from_toml_dict(load_defaults_dict())
        draft.config_files = ["<defaults>"]
        return draft

    @classmethod
    def from_toml_dict(cls, data: TomlTable) -> MutableConfig:
        """Build a sparse builder from a CogMark TOML table.

        Unknown keys are ignored. Wrongly typed values are skipped with a
        warning diagnostic recorded on the returned builder.

        Args:
            data (TomlTable): The CogMark table (top level of `cogmark.toml`).

        Returns:
            MutableConfig: A builder holding only the values present in ``data``.
        """
        diags = DiagnosticLog()

        markers: TomlTable = get_table_value(data, Toml.SECTION_MARKERS, diags)
        generator: TomlTable = get_table_value(data, Toml.SECTION_GENERATOR, diags)
        run: TomlTable = get_table_value(data, Toml.SECTION_RUN, diags)

        m, g, r = Toml.SECTION_MARKERS, Toml.SECTION_GENERATOR, Toml.SECTION_RUN
        return cls(
            start_mark=get_string_checked(markers, m, Toml.KEY_START, diags),
            end_mark=get_string_checked(markers, m, Toml.KEY_END, diags),
            command=get_string_checked(generator, g, Toml.KEY_COMMAND, diags),
            args=get_string_list_checked(generator, g, Toml.KEY_ARGS, diags),
            ext=get_string_checked(generator, g, Toml.KEY_EXT, diags),
            assume_end_at_eof=get_bool_checked(run, r, Toml.KEY_ASSUME_END_AT_EOF, diags),
            excise=get_bool_checked(run, r, Toml.KEY_EXCISE, diags),
            serial=get_bool_checked(run, r, Toml.KEY_SERIAL, diags),
            jobs=get_int_checked(run, r, Toml.KEY_JOBS, diags),
            diagnostics=diags,
        )

    @classmethod
    def from_toml_file(cls, path: Path) -> MutableConfig | None:
        """Load configuration from a single TOML file.

        Supports both `cogmark.toml` and `pyproject.toml` files, extracting the
        ``[tool.cogmark]`` section from the latter.

        Args:
            path (Path): Path to the TOML file.

        Returns:
            MutableConfig | None: The builder if successful; None if a
            `pyproject.toml` has no ``[tool.cogmark]`` section.
        """
        logger.debug("Creating MutableConfig from TOML config: %s", path)

        table: TomlTable | None = extract_cogmark_table(path, load_toml_dict(path))
        if table is None:
            logger.debug("[tool.cogmark] section missing in %s", path)
            return None

        draft: MutableConfig = cls.from_toml_dict(table)
        draft.config_files = [path]
        logger.debug("Generated MutableConfig: %s", draft)
        return draft

    @classmethod
    def discover_local_config_files(cls, start: Path) -> list[Path]:
        """Return config files discovered by walking upward from ``start``.

        Files are returned **root-most → nearest**. Within one directory
        `pyproject.toml` comes before `cogmark.toml`, so the dedicated file wins
        a later last-wins merge. A config declaring ``root = true`` stops the
        upward walk after its directory.

        Args:
            start (Path): The Path instance where discovery starts.

        Returns:
            list[Path]: Discovered config file paths ordered for stable merging.
        """
        per_dir: list[list[Path]] = []
        cur: Path = start.resolve()
        if cur.is_file():
            cur = cur.parent

        while True:
            root_stop_here = False
            dir_entries: list[Path] = []

            for name in (PYPROJECT_FILE_NAME, CONFIG_FILE_NAME):
                p: Path = cur / name
                if not p.is_file():
                    continue
                table: TomlTable | None = extract_cogmark_table(p, load_toml_dict(p))
                if table is None:
                    continue
                dir_entries.append(p)
                logger.debug("Discovered config file: %s", p)
                if table.get(Toml.KEY_ROOT) is True:
                    root_stop_here = True

            if dir_entries:
                per_dir.append(dir_entries)

            parent: Path = cur.parent
            if parent == cur:
                break
            if root_stop_here:
                logger.debug("Stopping upward config discovery at %s due to root=true", cur)
                break
            cur = parent

        ordered: list[Path] = []
        for dir_list in reversed(per_dir):  # root-most first
            ordered.extend(dir_list)
        return ordered

    @classmethod
    def discover_user_config_file(cls) -> Path | None:
        """Return a user-scoped config path if it exists.

        Looks under XDG config (``$XDG_CONFIG_HOME/cogmark/cogmark.toml``) and a legacy
        fallback (``~/.cogmark.toml``). The first existing path is returned.
        """
        xdg: str | None = os.environ.get("XDG_CONFIG_HOME")
        base: Path = Path(xdg) if xdg else Path.home() / ".config"
        for p in (base / "cogmark" / CONFIG_FILE_NAME, Path.home() / f".{CONFIG_FILE_NAME}"):
            if p.is_file():
                return p
        return None

    @classmethod
    def load_merged(
        cls,
        *,
        anchor: Path | None = None,
        extra_config_files: Iterable[Path] | None = None,
        no_config: bool = False,
    ) -> MutableConfig:
        """Discover and merge configuration layers into a draft `MutableConfig`.

        Args:
            anchor (Path | None): Directory (or file) where upward discovery starts;
                defaults to the current working directory.
            extra_config_files (Iterable[Path] | None): Explicit config files merged
                **after** discovery, in the given order.
            no_config (bool): If True, skip user and project discovery.

        Returns:
            MutableConfig: A mutable configuration draft ready to be frozen or further edited.
        """
        draft: MutableConfig = cls.from_defaults()
        start: Path = anchor if anchor is not None else Path.cwd()

        if not no_config:
            user_cfg_path: Path | None = cls.discover_user_config_file()
            if user_cfg_path is not None:
                user_cfg: MutableConfig | None = cls.from_toml_file(user_cfg_path)
                if user_cfg is not None:
                    draft = draft.merge_with(user_cfg)

            for cfg_path in cls.discover_local_config_files(start):
                mc: MutableConfig | None = cls.from_toml_file(cfg_path)
                if mc is not None:
                    draft = draft.merge_with(mc)

        for extra in extra_config_files or ():
            mc = cls.from_toml_file(Path(extra))
            if mc is None:
                draft.diagnostics.add_warning(f"No CogMark configuration found in {extra}")
                continue
            draft = draft.merge_with(mc)

        return draft

    # ------------------------------- Merging -------------------------------
    def merge_with(self, other: MutableConfig) -> MutableConfig:
        """Return a new draft where values set in ``other`` override this draft.

        Args:
            other (MutableConfig): The config whose values override those of this draft.

        Returns:
            MutableConfig: A new mutable configuration representing the merged result.
        """

        def pick(mine: Any, theirs: Any) -> Any:
            return theirs if theirs is not None else mine

        diagnostics = DiagnosticLog()
        diagnostics.extend(self.diagnostics.items)
        diagnostics.extend(other.diagnostics.items)

        return MutableConfig(
            start_mark=pick(self.start_mark, other.start_mark),
            end_mark=pick(self.end_mark, other.end_mark),
            command=pick(self.command, other.command),
            args=list(other.args) if other.args is not None else self.args,
            ext=pick(self.ext, other.ext),
            assume_end_at_eof=pick(self.assume_end_at_eof, other.assume_end_at_eof),
            excise=pick(self.excise, other.excise),
            serial=pick(self.serial, other.serial),
            jobs=pick(self.jobs, other.jobs),
            verbosity_level=pick(self.verbosity_level, other.verbosity_level),
            quiet=pick(self.quiet, other.quiet),
            config_files=self.config_files + other.config_files,
            diagnostics=diagnostics,
        )

    def apply_cli_args(self, args: ArgsLike) -> MutableConfig:
        """Update fields from an arguments mapping (CLI or API).

        Keys that are absent, or whose value is ``None``, leave the current value
        untouched. Flags that influence config discovery (``--config``,
        ``--no-config``) are not handled here.

        Args:
            args (ArgsLike): Parsed arguments mapping.

        Returns:
            MutableConfig: This builder, updated in place.
        """
        logger.debug("Applying CLI arguments to MutableConfig: %s", args)
        self.config_files.append(CLI_OVERRIDE_STR)

        for name in (
            "start_mark",
            "end_mark",
            "command",
            "ext",
            "jobs",
            "verbosity_level",
        ):
            value: Any = args.get(name)
            if value is not None:
                setattr(self, name, value)

        # Boolean flags only ever switch a behavior on from the command line.
        for name in ("assume_end_at_eof", "excise", "serial", "quiet"):
            if args.get(name):
                setattr(self, name, True)

        cli_args: Any = args.get("args")
        if cli_args is not None:
            self.args = list(cli_args)

        return self
