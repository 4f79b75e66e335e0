#!/usr/bin/env python3
"""Sampling-based duplicate file checks with structured NDJSON logging."""

from __future__ import annotations

import hashlib
import json
import logging
import os
import stat
import sys
import time
import uuid
from concurrent.futures import ThreadPoolExecutor
from dataclasses import asdict, dataclass, field
from datetime import datetime, timezone
from itertools import repeat
from logging.handlers import RotatingFileHandler
from pathlib import Path
from typing import Any, Dict, List, Optional, Sequence, TextIO, Tuple, Union

MODULE_VERSION = "1.0.0"
DEFAULT_ENV = "dev"
PROGRESS_STEP = 500

DEFAULT_SAMPLE_COUNT = 5
EXACT_COMPARE_THRESHOLD = 5000
SOURCE_FOLDER_NAME = "SourceFiles"
MATCHES_HEADER = "Matches found. See detail results below."

LOG_DIR_ENV = "SPOTCHECK_LOG_DIR"
ENV_NAME_ENV = "SPOTCHECK_ENV"
DEFAULT_LOG_DIR = Path(__file__).resolve().parent / "logs"
GENERAL_LOG_FILENAME = "spot-check.log"
GENERAL_TEXT_LOG_FILENAME = "spot-check.txt"
API_LOG_FILENAME = "spot-check.api.log"
API_TEXT_LOG_FILENAME = "spot-check.api.txt"
LOG_MAX_BYTES = 5 * 1024 * 1024
LOG_BACKUP_COUNT = 5
API_LOG_BACKUP_COUNT = 3

TIER_INVALID = "invalid"
TIER_LENGTH_MISMATCH = "length_mismatch"
TIER_METADATA = "metadata"
TIER_EXACT = "exact"
TIER_SAMPLED = "sampled"

# Sample count served by the fixed quarter-mark layout.
_QUARTER_LAYOUT_COUNT = 5


class SpotCheckError(Exception):
    """Base class for sampling and comparison errors."""


class InvalidSampleCountError(SpotCheckError, ValueError):
    """Raised when a sample count cannot be laid out over a file."""


class SampleLengthMismatchError(SpotCheckError, AssertionError):
    """Raised when two sample sets of different lengths are compared."""


class SampleOffsetError(SpotCheckError, ValueError):
    """Raised when a sample offset falls outside the file."""


def _iso_utc(timestamp: float) -> str:
    """Return ISO-8601 UTC timestamp with Z suffix."""
    dt = datetime.fromtimestamp(timestamp, tz=timezone.utc)
    return dt.strftime("%Y-%m-%dT%H:%M:%SZ")


class NDJSONFormatter(logging.Formatter):
    """Render log records as single-line JSON objects."""

    def format(self, record: logging.LogRecord) -> str:
        payload = getattr(record, "log_payload", {}).copy()
        payload.setdefault("timestamp", _iso_utc(record.created))
        payload.setdefault("level", record.levelname)

        message = record.getMessage()
        if not payload.get("message"):
            payload["message"] = message

        payload.setdefault("event", getattr(record, "event", message))
        return json.dumps(payload, ensure_ascii=False, default=str)


class PlainTextFormatter(logging.Formatter):
    """Render log records as human-readable text."""

    def format(self, record: logging.LogRecord) -> str:
        payload = getattr(record, "log_payload", {}).copy()
        message = record.getMessage()
        event = payload.get("event") or getattr(record, "event", message)
        human_message = payload.get("message") or message
        extras = {k: v for k, v in payload.items() if k not in {"event", "message"}}
        extra_str = " ".join(f"{key}={value}" for key, value in sorted(extras.items()))
        base = f"{_iso_utc(record.created)} [{record.levelname}] {event}: {human_message}"
        return f"{base} | {extra_str}" if extra_str else base


class _ComponentFilter(logging.Filter):
    def __init__(self, *, component: str) -> None:
        super().__init__()
        self._component = component

    def filter(self, record: logging.LogRecord) -> bool:
        payload = getattr(record, "log_payload", {})
        return payload.get("component") == self._component


def _resolve_log_dir() -> Path:
    override = os.getenv(LOG_DIR_ENV)
    candidate = Path(override).expanduser() if override else DEFAULT_LOG_DIR
    try:
        candidate.mkdir(parents=True, exist_ok=True)
    except OSError:
        candidate = DEFAULT_LOG_DIR
        candidate.mkdir(parents=True, exist_ok=True)
    return candidate


def _rotating_handler(
    path: Path,
    formatter: logging.Formatter,
    backup_count: int,
    component: Optional[str] = None,
) -> RotatingFileHandler:
    handler = RotatingFileHandler(
        path,
        maxBytes=LOG_MAX_BYTES,
        backupCount=backup_count,
        encoding="utf-8",
        delay=True,
    )
    handler.setFormatter(formatter)
    if component:
        handler.addFilter(_ComponentFilter(component=component))
    return handler


def _sample_count_problem(sample_count: Any) -> Optional[str]:
    if isinstance(sample_count, bool) or not isinstance(sample_count, int):
        return f"Sample count must be an integer, got {sample_count!r}"
    if sample_count <= 0:
        return f"Sample count must be at least 1, got {sample_count}"
    return None


def compute_sample_offsets(length: int, sample_count: int = DEFAULT_SAMPLE_COUNT) -> List[int]:
    """Return ``sample_count`` byte offsets spread across ``length`` bytes.

    Five samples use the fixed layout: first byte, the quarter, half and
    three-quarter marks (truncated), and the last byte. Any other count
    divides the file into ``length / sample_count`` sized units and takes the
    truncated ``unit * index`` for interior samples. The first offset is
    always 0; the last is ``length - 1`` unless only one sample is requested,
    in which case the single offset is 0.

    Raises:
        InvalidSampleCountError: the count is not a positive integer, the
            file is empty, or more samples are requested than there are bytes.
    """
    problem = _sample_count_problem(sample_count)
    if problem:
        raise InvalidSampleCountError(problem)
    if length <= 0:
        raise InvalidSampleCountError(f"Cannot sample a file of length {length}")
    if sample_count > length:
        raise InvalidSampleCountError(
            f"Sample count {sample_count} exceeds file length {length}"
        )

    if sample_count == _QUARTER_LAYOUT_COUNT:
        return [0, length // 4, length // 2, (length * 3) // 4, length - 1]

    offsets: List[int] = []
    for index in range(sample_count):
        if index == 0:
            offsets.append(0)
        elif index == sample_count - 1:
            offsets.append(length - 1)
        else:
            # Exact floor of (length / sample_count) * index.
            offsets.append((length * index) // sample_count)
    return offsets


def extract_samples(file_path: Union[str, Path], offsets: Sequence[int]) -> bytes:
    """Read the single byte at each offset, in the order given."""
    path = Path(file_path)
    samples = bytearray()
    with path.open("rb") as handle:
        for offset in offsets:
            if offset < 0:
                raise SampleOffsetError(f"Negative sample offset {offset} for {path}")
            handle.seek(offset)
            chunk = handle.read(1)
            if not chunk:
                raise SampleOffsetError(f"Sample offset {offset} is past the end of {path}")
            samples += chunk
    return bytes(samples)


def compare_sample_sets(samples_a: bytes, samples_b: bytes) -> bool:
    """Return True when both sample sets hold the same bytes.

    Stops at the first differing position.
    """
    if len(samples_a) != len(samples_b):
        raise SampleLengthMismatchError(
            f"Sample sets differ in length: {len(samples_a)} != {len(samples_b)}"
        )
    for byte_a, byte_b in zip(samples_a, samples_b):
        if byte_a != byte_b:
            return False
    return True


def _top_level_files(directory: Path) -> List[Path]:
    return sorted(entry for entry in directory.iterdir() if entry.is_file())


def list_batch_files(root: Union[str, Path]) -> Tuple[List[Path], List[Path]]:
    """Return the files under ``root/SourceFiles`` and the files directly in ``root``."""
    root_path = Path(root)
    if not root_path.is_dir():
        raise FileNotFoundError(f"Directory not found: {root_path}")
    source_dir = root_path / SOURCE_FOLDER_NAME
    if not source_dir.is_dir():
        raise FileNotFoundError(f"Directory not found: {source_dir}")
    return _top_level_files(source_dir), _top_level_files(root_path)


def _attributes(file_stat: os.stat_result) -> Tuple[int, int]:
    return stat.S_IFMT(file_stat.st_mode), stat.S_IMODE(file_stat.st_mode)


@dataclass
class CheckResult:
    """Verdict for one pair of files."""

    matched: bool
    tier: str
    path_a: str
    path_b: str
    size: Optional[int] = None
    sample_count: Optional[int] = None
    offsets: List[int] = field(default_factory=list)
    diagnostics: List[str] = field(default_factory=list)

    def __bool__(self) -> bool:
        return self.matched

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)


@dataclass
class BatchResult:
    """Outcome of a SourceFiles-against-root batch run."""

    root: str
    sample_count: int
    checks_performed: int = 0
    matches: List[Tuple[str, str]] = field(default_factory=list)
    diagnostics: List[str] = field(default_factory=list)

    @property
    def report(self) -> List[str]:
        if not self.matches:
            return []
        lines = [MATCHES_HEADER]
        lines.extend(f"SourceFile: {source}\nTargetFile: {target}" for source, target in self.matches)
        return lines

    def to_dict(self) -> Dict[str, Any]:
        payload = asdict(self)
        payload["matches"] = [list(pair) for pair in self.matches]
        payload["report"] = self.report
        return payload


class SpotChecker:
    """Check file pairs for duplicate content by sampling bytes."""

    def __init__(
        self,
        hash_method: str = "md5",
        chunk_size: int = 8192,
        *,
        environment: Optional[str] = None,
        version: str = MODULE_VERSION,
        logger: Optional[logging.Logger] = None,
    ) -> None:
        self.hash_method = hash_method.lower()
        self.chunk_size = chunk_size
        self.env = (environment or os.getenv(ENV_NAME_ENV, DEFAULT_ENV)).lower()
        self.version = version
        self.component = "library"

        if self.hash_method not in {"md5", "sha256"}:
            raise ValueError("hash_method must be 'md5' or 'sha256'")

        self.logger = logger or self._setup_logger()

    def _setup_logger(self) -> logging.Logger:
        logger = logging.getLogger("spot_check")
        logger.setLevel(logging.INFO)
        if not logger.handlers:
            log_dir = _resolve_log_dir()

            stream_handler = logging.StreamHandler()
            stream_handler.setFormatter(NDJSONFormatter())
            logger.addHandler(stream_handler)

            logger.addHandler(
                _rotating_handler(log_dir / GENERAL_LOG_FILENAME, NDJSONFormatter(), LOG_BACKUP_COUNT)
            )
            logger.addHandler(
                _rotating_handler(log_dir / GENERAL_TEXT_LOG_FILENAME, PlainTextFormatter(), LOG_BACKUP_COUNT)
            )
            logger.addHandler(
                _rotating_handler(
                    log_dir / API_LOG_FILENAME, NDJSONFormatter(), API_LOG_BACKUP_COUNT, component="api"
                )
            )
            logger.addHandler(
                _rotating_handler(
                    log_dir / API_TEXT_LOG_FILENAME, PlainTextFormatter(), API_LOG_BACKUP_COUNT, component="api"
                )
            )

        return logger

    def _build_log_context(self, extra: Optional[Dict[str, Any]] = None) -> Dict[str, Any]:
        payload: Dict[str, Any] = {
            "check_id": str(uuid.uuid4()),
            "component": self.component,
            "version": self.version,
            "env": self.env,
        }
        if extra:
            payload.update(extra)
        return payload

    def _log_event(
        self,
        event: str,
        level: int,
        message: str,
        context: Optional[Dict[str, Any]] = None,
        **fields: Any,
    ) -> None:
        if not self.logger.isEnabledFor(level):
            return
        payload: Dict[str, Any] = {"event": event, "message": message}
        if context:
            payload.update(context)
        else:
            payload.setdefault("component", self.component)
            payload.setdefault("version", self.version)
            payload.setdefault("env", self.env)
        payload.update(fields)
        self.logger.log(level, message, extra={"log_payload": payload})

    @staticmethod
    def _duration_ms(start_time: float) -> int:
        return max(0, int((time.perf_counter() - start_time) * 1000))

    @staticmethod
    def _file_stat(path: Path) -> os.stat_result:
        if not path.exists():
            raise FileNotFoundError(f"File not found: {path}")
        if not path.is_file():
            raise ValueError(f"Path is not a regular file: {path}")
        return path.stat()

    def _finish(self, result: CheckResult, context: Dict[str, Any], start: float) -> CheckResult:
        level = logging.WARNING if result.tier == TIER_INVALID else logging.DEBUG
        self._log_event(
            "check_finished",
            level,
            "Check finished",
            context,
            matched=result.matched,
            tier=result.tier,
            size=result.size,
            diagnostics=result.diagnostics or None,
            duration_ms=self._duration_ms(start),
        )
        return result

    def check(
        self,
        path_a: Union[str, Path],
        path_b: Union[str, Path],
        sample_count: int = DEFAULT_SAMPLE_COUNT,
    ) -> CheckResult:
        """Tiered duplicate check.

        Files of different lengths never match. Files up to
        ``EXACT_COMPARE_THRESHOLD`` bytes are compared in full; larger files
        are compared on ``sample_count`` sampled bytes, so a match there only
        means no difference was seen at the sampled offsets.

        An invalid sample count yields a non-matching result with a
        diagnostic; missing or unreadable files raise.
        """
        file_a = Path(path_a)
        file_b = Path(path_b)
        context = self._build_log_context(
            {"check_mode": "soft", "path_a": str(file_a), "path_b": str(file_b), "sample_count": sample_count}
        )
        start = time.perf_counter()
        result = CheckResult(
            matched=False,
            tier=TIER_INVALID,
            path_a=str(file_a),
            path_b=str(file_b),
            sample_count=sample_count,
        )

        problem = _sample_count_problem(sample_count)
        if problem:
            result.diagnostics.append(problem)
            return self._finish(result, context, start)

        size_a = self._file_stat(file_a).st_size
        size_b = self._file_stat(file_b).st_size
        if size_a != size_b:
            result.tier = TIER_LENGTH_MISMATCH
            return self._finish(result, context, start)

        result.size = size_a
        if size_a <= EXACT_COMPARE_THRESHOLD:
            result.tier = TIER_EXACT
            result.matched = file_a.read_bytes() == file_b.read_bytes()
            return self._finish(result, context, start)

        try:
            offsets = compute_sample_offsets(size_a, sample_count)
        except InvalidSampleCountError as exc:
            result.diagnostics.append(str(exc))
            return self._finish(result, context, start)

        result.tier = TIER_SAMPLED
        result.offsets = offsets
        result.matched = compare_sample_sets(
            extract_samples(file_a, offsets),
            extract_samples(file_b, offsets),
        )
        return self._finish(result, context, start)

    def meta_check(self, path_a: Union[str, Path], path_b: Union[str, Path]) -> CheckResult:
        """Compare length and file attributes without reading content."""
        file_a = Path(path_a)
        file_b = Path(path_b)
        stat_a = self._file_stat(file_a)
        stat_b = self._file_stat(file_b)
        matched = stat_a.st_size == stat_b.st_size and _attributes(stat_a) == _attributes(stat_b)
        return CheckResult(
            matched=matched,
            tier=TIER_METADATA,
            path_a=str(file_a),
            path_b=str(file_b),
            size=stat_a.st_size if stat_a.st_size == stat_b.st_size else None,
        )

    def strict_check(
        self,
        path_a: Union[str, Path],
        path_b: Union[str, Path],
        sample_count: int = DEFAULT_SAMPLE_COUNT,
    ) -> CheckResult:
        """Require matching file and parent directory attributes, then run :meth:`check`."""
        meta = self.meta_check(path_a, path_b)
        if not meta:
            return meta

        parent_a = Path(path_a).resolve().parent
        parent_b = Path(path_b).resolve().parent
        if _attributes(parent_a.stat()) != _attributes(parent_b.stat()):
            meta.matched = False
            meta.diagnostics.append(f"Directory attributes differ: {parent_a} vs {parent_b}")
            return meta

        return self.check(path_a, path_b, sample_count)

    def micro_check(self, path_a: Union[str, Path], path_b: Union[str, Path]) -> CheckResult:
        """Compare the default five samples of each file with no size tiers.

        Each file is sampled at offsets derived from its own length.
        """
        file_a = Path(path_a)
        file_b = Path(path_b)
        result = CheckResult(
            matched=False,
            tier=TIER_SAMPLED,
            path_a=str(file_a),
            path_b=str(file_b),
            sample_count=DEFAULT_SAMPLE_COUNT,
        )
        try:
            offsets_a = compute_sample_offsets(self._file_stat(file_a).st_size)
            offsets_b = compute_sample_offsets(self._file_stat(file_b).st_size)
        except InvalidSampleCountError as exc:
            result.tier = TIER_INVALID
            result.diagnostics.append(str(exc))
            return result

        result.offsets = offsets_a
        result.matched = compare_sample_sets(
            extract_samples(file_a, offsets_a),
            extract_samples(file_b, offsets_b),
        )
        return result

    def _check_pair(
        self, pair: Tuple[Path, Path], sample_count: int
    ) -> Tuple[Optional[CheckResult], Optional[Exception]]:
        source, target = pair
        try:
            return self.check(source, target, sample_count), None
        except Exception as exc:
            return None, exc

    def batch_check(
        self,
        root: Union[str, Path],
        sample_count: int = DEFAULT_SAMPLE_COUNT,
        *,
        max_workers: int = 1,
    ) -> BatchResult:
        """Check every file in ``root/SourceFiles`` against every file in ``root``.

        Failures on a single pair are recorded in ``diagnostics`` and the run
        carries on with the remaining pairs.
        """
        root_path = Path(root)
        source_files, target_files = list_batch_files(root_path)
        pairs = [(source, target) for source in source_files for target in target_files]

        context = self._build_log_context(
            {
                "check_mode": "batch",
                "root_dir": str(root_path.resolve()),
                "sample_count": sample_count,
                "max_workers": max_workers,
            }
        )
        self._log_event(
            "batch_started",
            logging.INFO,
            "Batch started",
            context,
            source_files=len(source_files),
            target_files=len(target_files),
            pairs=len(pairs),
        )
        start = time.perf_counter()
        result = BatchResult(root=str(root_path), sample_count=sample_count)

        if max_workers > 1:
            with ThreadPoolExecutor(max_workers=max_workers) as executor:
                outcomes = list(executor.map(self._check_pair, pairs, repeat(sample_count)))
        else:
            outcomes = [self._check_pair(pair, sample_count) for pair in pairs]

        for (source, target), (verdict, error) in zip(pairs, outcomes):
            result.checks_performed += 1
            if error is not None:
                message = f"{source} vs {target}: {error.__class__.__name__}: {error}"
                result.diagnostics.append(message)
                self._log_event(
                    "batch_pair_failed",
                    logging.WARNING,
                    "Pair check failed",
                    context,
                    source_file=str(source),
                    target_file=str(target),
                    exception_type=error.__class__.__name__,
                    exception_msg=str(error),
                )
            elif verdict is not None:
                result.diagnostics.extend(f"{source} vs {target}: {note}" for note in verdict.diagnostics)
                if verdict.matched:
                    result.matches.append((str(source), str(target)))

            if result.checks_performed % PROGRESS_STEP == 0:
                self._log_event(
                    "batch_progress",
                    logging.INFO,
                    "Batch progress",
                    context,
                    checks_performed=result.checks_performed,
                    duration_ms=self._duration_ms(start),
                )

        self._log_event(
            "batch_finished",
            logging.INFO,
            "Batch finished",
            context,
            checks_performed=result.checks_performed,
            matches_found=len(result.matches),
            failures=len(result.diagnostics),
            duration_ms=self._duration_ms(start),
        )
        return result

    def calculate_file_hash(self, file_path: Union[str, Path]) -> str:
        path = Path(file_path)
        self._file_stat(path)

        hasher = hashlib.md5() if self.hash_method == "md5" else hashlib.sha256()
        with path.open("rb") as handle:
            while chunk := handle.read(self.chunk_size):
                hasher.update(chunk)
        digest = hasher.hexdigest()
        self._log_event(
            "hash_computed",
            logging.DEBUG,
            "Hash computed",
            file=str(path),
            hash_method=self.hash_method,
            hash_prefix=digest[:12],
        )
        return digest

    def hash_check(self, path_a: Union[str, Path], path_b: Union[str, Path]) -> bool:
        """Whole-file digest comparison, kept as a reference for the sampled checks."""
        return self.calculate_file_hash(path_a) == self.calculate_file_hash(path_b)


def spot_check(
    path_a: Union[str, Path],
    path_b: Union[str, Path],
    sample_count: int = DEFAULT_SAMPLE_COUNT,
) -> bool:
    return SpotChecker().check(path_a, path_b, sample_count).matched


def batch_spot_check(root: Union[str, Path], sample_count: int = DEFAULT_SAMPLE_COUNT) -> List[str]:
    return SpotChecker().batch_check(root, sample_count).report


# Command console

SOFT_SPOT = "SoftSpot"
BATCH_SPOT = "BatchSpot"
HELP_ME = "HelpMe"

ERROR_PREFIX = "There has been an error processing your command. Message: "
INVALID_OPTIONS = "Invalid number of command input options. Please check your input."

BANNER = [
    "*" * 79,
    "*" + "SPOT CHECK COMMAND CONSOLE".center(77) + "*",
    "*" * 79,
    "",
    "Input command line <enter> or input HelpMe <enter> for help... ",
    "",
]

HELP_TEXT = [
    "*" * 78,
    "*" + "HELP AND OPTIONS".center(76) + "*",
    "*" * 78,
    "Supported commands include the following, with options shown...",
    "",
    "SoftSpot [SrcFilePath] [TrgFilePath] [optional precision factor]",
    "   Tests source file against target file and returns True if the files seem",
    "   to contain duplicate binary content, False if they do not.",
    "",
    "BatchSpot [SearchFilePath] [optional precision factor]",
    "   If the specified path exists and contains a subfolder named SourceFiles,",
    "   each file in the SourceFiles folder is tested for duplicate content",
    "   against each of the files in the top level input folder.",
    "",
    "HelpMe - Shows this text.",
    "",
    "An empty line exits the console.",
    "*" * 78,
]


@dataclass
class ParsedCommand:
    name: str
    paths: List[str]
    sample_count: int = DEFAULT_SAMPLE_COUNT


@dataclass
class CommandError:
    message: str


def _parse_sample_count(token: str) -> Union[int, CommandError]:
    try:
        return int(token)
    except ValueError:
        return CommandError(f"Invalid precision factor: {token!r}")


def parse_tokens(tokens: Sequence[str]) -> Optional[Union[ParsedCommand, CommandError]]:
    """Turn console tokens into a command, an error, or None for unknown input."""
    if not tokens:
        return None
    name, args = tokens[0], list(tokens[1:])

    if name == HELP_ME:
        return ParsedCommand(name=name, paths=[])

    if name == SOFT_SPOT:
        if len(args) < 2:
            return CommandError("SoftSpot requires a source and a target file path.")
        if len(args) > 3:
            return CommandError(INVALID_OPTIONS)
        path_count = 2
    elif name == BATCH_SPOT:
        if not args or len(args) > 2:
            return CommandError(INVALID_OPTIONS)
        path_count = 1
    else:
        return None

    command = ParsedCommand(name=name, paths=args[:path_count])
    if len(args) > path_count:
        sample_count = _parse_sample_count(args[path_count])
        if isinstance(sample_count, CommandError):
            return sample_count
        command.sample_count = sample_count
    return command


def parse_command(line: str) -> Optional[Union[ParsedCommand, CommandError]]:
    return parse_tokens(line.split())


def execute_command(checker: SpotChecker, command: Optional[Union[ParsedCommand, CommandError]]) -> List[str]:
    """Run a parsed command and return the lines to print."""
    if command is None:
        return []
    if isinstance(command, CommandError):
        return [ERROR_PREFIX + command.message]
    if command.name == HELP_ME:
        return list(HELP_TEXT)

    try:
        if command.name == SOFT_SPOT:
            result = checker.check(command.paths[0], command.paths[1], command.sample_count)
            lines = [str(result.matched)]
            diagnostics = result.diagnostics
        else:
            batch = checker.batch_check(command.paths[0], command.sample_count)
            lines = batch.report or [
                f"Batch processing of files in path: {command.paths[0]} "
                "has completed with no likely duplicate files found."
            ]
            diagnostics = batch.diagnostics
    except (OSError, ValueError, SpotCheckError) as exc:
        return [ERROR_PREFIX + str(exc)]

    lines.extend(f"Message: {message}" for message in diagnostics)
    return lines


def run_console(checker: SpotChecker, stdin: TextIO, stdout: TextIO) -> None:
    for line in BANNER:
        print(line, file=stdout)
    while True:
        raw = stdin.readline()
        if not raw or not raw.strip():
            break
        for output in execute_command(checker, parse_command(raw)):
            print(output, file=stdout)


def main(argv: Optional[Sequence[str]] = None) -> int:
    args = list(sys.argv[1:] if argv is None else argv)
    checker = SpotChecker()
    if not args:
        run_console(checker, sys.stdin, sys.stdout)
        return 0

    command = parse_tokens(args)
    for output in execute_command(checker, command):
        print(output)
    return 1 if isinstance(command, CommandError) else 0


if __name__ == "__main__":
    sys.exit(main())
