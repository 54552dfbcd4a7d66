# =============================================================================
# File: model_registry.py
# Date: 2026-10-18
# Copyright (c) 2024 Goutam Malakar. All rights reserved.
# =============================================================================

"""Discovery and validation of language-pair model directories.

A model directory is named after its pair (``en-zh`` or ``enzh``) and must
hold one file for each of the four artifact roles. Files are classified by
an ordered rule table, so the matching logic stays declarative and can be
exercised without touching the filesystem.
"""

import os
import re
import threading
from dataclasses import dataclass, field
from enum import Enum
from typing import Dict, Iterable, List, Optional, Set, Tuple

from app.exceptions import InvalidInputError, ModelNotAvailable
from app.logger import get_logger
from app.modules.concurrent_dict import ConcurrentDict
from app.utils.language_codes import is_valid_code, normalize, pair_key
from app.utils.log_sanitizer import sanitize_for_log
from app.utils.path_validator import validate_safe_path

logger = get_logger("model_registry")


class ArtifactRole(str, Enum):
    WEIGHTS = "model"
    LEXICON = "lex"
    SOURCE_VOCAB = "srcvocab"
    TARGET_VOCAB = "trgvocab"
    # Only ever used to fill the two vocabulary roles.
    SHARED_VOCAB = "vocab"


REQUIRED_ROLES: Tuple[ArtifactRole, ...] = (
    ArtifactRole.WEIGHTS,
    ArtifactRole.LEXICON,
    ArtifactRole.SOURCE_VOCAB,
    ArtifactRole.TARGET_VOCAB,
)

# Names reported when a role cannot be satisfied.
EXPECTED_NAMES: Dict[ArtifactRole, str] = {
    ArtifactRole.WEIGHTS: "model.intgemm8.bin",
    ArtifactRole.LEXICON: "lex.s2t.bin",
    ArtifactRole.SOURCE_VOCAB: "srcvocab.xxen.spm",
    ArtifactRole.TARGET_VOCAB: "trgvocab.xxen.spm",
}


@dataclass(frozen=True)
class ArtifactRule:
    role: ArtifactRole
    extension: str
    pattern: "re.Pattern[str]"
    priority: int


def _rule(role: ArtifactRole, extension: str, pattern: str, priority: int) -> ArtifactRule:
    return ArtifactRule(role, extension, re.compile(pattern, re.IGNORECASE), priority)


# Lower priority wins; exact names first, permissive patterns last.
ARTIFACT_RULES: Tuple[ArtifactRule, ...] = (
    _rule(ArtifactRole.WEIGHTS, ".bin", r"^model\.bin$", 0),
    _rule(ArtifactRole.LEXICON, ".bin", r"^lex\.bin$", 0),
    _rule(ArtifactRole.SOURCE_VOCAB, ".spm", r"^srcvocab\.spm$", 0),
    _rule(ArtifactRole.TARGET_VOCAB, ".spm", r"^trgvocab\.spm$", 0),
    _rule(ArtifactRole.SHARED_VOCAB, ".spm", r"^vocab\.spm$", 0),
    _rule(ArtifactRole.WEIGHTS, ".bin", r"^model\.([a-z]+\.)?intgemm8\.bin$", 1),
    _rule(ArtifactRole.WEIGHTS, ".bin", r"^model\.([a-z]+\.)?intgemm\.alphas\.bin$", 1),
    _rule(ArtifactRole.LEXICON, ".bin", r"^lex\.50\.50\..*\.s2t\.bin$", 1),
    _rule(ArtifactRole.SOURCE_VOCAB, ".spm", r"^srcvocab\..+\.spm$", 1),
    _rule(ArtifactRole.TARGET_VOCAB, ".spm", r"^trgvocab\..+\.spm$", 1),
    _rule(ArtifactRole.SHARED_VOCAB, ".spm", r"^vocab\..+\.spm$", 1),
    _rule(ArtifactRole.WEIGHTS, ".bin", r"^model\..+\.bin$", 2),
    _rule(ArtifactRole.LEXICON, ".bin", r"^lex\..+\.s2t\.bin$", 2),
    _rule(ArtifactRole.LEXICON, ".bin", r"\.s2t\.bin$", 3),
)


def classify_file(
    filename: str, rules: Iterable[ArtifactRule] = ARTIFACT_RULES
) -> Optional[Tuple[ArtifactRole, int]]:
    """Return the best ``(role, priority)`` for a filename, or None if no rule matches."""
    extension = os.path.splitext(filename)[1].lower()
    best: Optional[ArtifactRule] = None
    for rule in rules:
        if rule.extension != extension or not rule.pattern.search(filename):
            continue
        if best is None or rule.priority < best.priority:
            best = rule
    if best is None:
        return None
    return best.role, best.priority


def select_artifacts(
    filenames: Iterable[str], rules: Iterable[ArtifactRule] = ARTIFACT_RULES
) -> Tuple[Dict[ArtifactRole, str], List[ArtifactRole]]:
    """Pick one file per required role.

    Returns the chosen filename per role and the roles left unmatched after
    the vocabulary fallbacks (shared vocab file, then the other direction's
    vocab file).
    """
    rules = tuple(rules)
    candidates: Dict[ArtifactRole, List[Tuple[int, str]]] = {}
    for name in filenames:
        match = classify_file(name, rules)
        if match is None:
            continue
        role, priority = match
        candidates.setdefault(role, []).append((priority, name))

    chosen: Dict[ArtifactRole, str] = {
        role: min(found)[1] for role, found in candidates.items()
    }
    shared = chosen.pop(ArtifactRole.SHARED_VOCAB, None)

    for role, other in (
        (ArtifactRole.SOURCE_VOCAB, ArtifactRole.TARGET_VOCAB),
        (ArtifactRole.TARGET_VOCAB, ArtifactRole.SOURCE_VOCAB),
    ):
        if role in chosen:
            continue
        if shared is not None:
            chosen[role] = shared
        elif other in chosen:
            chosen[role] = chosen[other]

    missing = [role for role in REQUIRED_ROLES if role not in chosen]
    return chosen, missing


def parse_pair_name(name: str) -> Optional[Tuple[str, str]]:
    """Parse ``<from>-<to>`` or a 4-character ``<from><to>`` directory name."""
    if "-" in name:
        source, target = name.split("-", 1)
    elif len(name) == 4 and name.isalpha():
        source, target = name[:2], name[2:]
    else:
        return None
    source, target = normalize(source), normalize(target)
    if not source or not target or source == target:
        return None
    return source, target


@dataclass(frozen=True)
class ArtifactBundle:
    """Raw artifact bytes plus the files they were read from."""

    weights: bytes
    lexicon: bytes
    source_vocab: bytes
    target_vocab: bytes
    paths: Dict[ArtifactRole, str]

    @property
    def total_bytes(self) -> int:
        return (
            len(self.weights)
            + len(self.lexicon)
            + len(self.source_vocab)
            + len(self.target_vocab)
        )


@dataclass(eq=False)
class ModelDescriptor:
    key: str
    source_lang: str
    target_lang: str
    artifact_dir: str
    artifact_files: Dict[ArtifactRole, str]
    artifacts: Optional[ArtifactBundle] = None
    _read_lock: threading.Lock = field(
        default_factory=threading.Lock, repr=False, compare=False
    )

    @property
    def is_loaded(self) -> bool:
        return self.artifacts is not None

    def load_artifacts(self) -> ArtifactBundle:
        """Read the four artifact files once and cache the bytes."""
        if self.artifacts is not None:
            return self.artifacts
        with self._read_lock:
            if self.artifacts is not None:
                return self.artifacts
            buffers: Dict[ArtifactRole, bytes] = {}
            try:
                for role in REQUIRED_ROLES:
                    with open(self.artifact_files[role], "rb") as f:
                        buffers[role] = f.read()
            except OSError as e:
                logger.error(
                    "Cannot read artifacts for %s: %s",
                    self.key,
                    sanitize_for_log(str(e)),
                )
                raise ModelNotAvailable(f"Cannot read model files for {self.key}: {e}")
            self.artifacts = ArtifactBundle(
                weights=buffers[ArtifactRole.WEIGHTS],
                lexicon=buffers[ArtifactRole.LEXICON],
                source_vocab=buffers[ArtifactRole.SOURCE_VOCAB],
                target_vocab=buffers[ArtifactRole.TARGET_VOCAB],
                paths=dict(self.artifact_files),
            )
            logger.info(
                "Loaded model files: %s (%d bytes)", self.key, self.artifacts.total_bytes
            )
            return self.artifacts

    def to_dict(self) -> Dict[str, str]:
        return {"key": self.key, "from": self.source_lang, "to": self.target_lang}


def inspect_directory(
    directory: str, rules: Iterable[ArtifactRule] = ARTIFACT_RULES
) -> Dict[ArtifactRole, str]:
    """Resolve artifact paths for a model directory or raise ModelNotAvailable."""
    try:
        with os.scandir(directory) as entries:
            names = [entry.name for entry in entries if entry.is_file()]
    except OSError as e:
        raise ModelNotAvailable(f"Cannot read model directory: {e}")

    chosen, missing = select_artifacts(names, rules)
    if missing:
        raise ModelNotAvailable(
            "Missing required files: "
            + ", ".join(EXPECTED_NAMES[role] for role in missing)
        )
    return {role: os.path.join(directory, name) for role, name in chosen.items()}


class ModelRegistry:
    """Lookup from canonical pair key to a lazily loaded ModelDescriptor."""

    def __init__(
        self,
        models_dir: str,
        rules: Iterable[ArtifactRule] = ARTIFACT_RULES,
        allowed_dirs: Iterable[str] = (),
    ):
        self.models_dir = models_dir
        # Caller-supplied directories must sit under one of these roots.
        self.allowed_dirs = [models_dir, *allowed_dirs]
        self._rules = tuple(rules)
        self._descriptors = ConcurrentDict("model_registry")

    def scan(self, root_dir: Optional[str] = None) -> Set[ModelDescriptor]:
        """Register every valid model directory under ``root_dir``.

        Invalid directories are logged and skipped; a missing root yields
        an empty result.
        """
        root = root_dir or self.models_dir
        try:
            with os.scandir(root) as entries:
                names = sorted(entry.name for entry in entries if entry.is_dir())
        except OSError as e:
            logger.warning(
                "No models directory found or error scanning %s: %s",
                sanitize_for_log(root),
                sanitize_for_log(str(e)),
            )
            return set()

        found: Set[ModelDescriptor] = set()
        discovered = 0
        for name in names:
            pair = parse_pair_name(name.lower())
            if pair is None:
                logger.debug("Skipping directory with unrecognized name: %s", sanitize_for_log(name))
                continue
            directory = os.path.join(root, name)
            try:
                artifact_files = inspect_directory(directory, self._rules)
            except ModelNotAvailable as e:
                logger.warning(
                    "Skipping model directory %s: %s",
                    sanitize_for_log(name),
                    sanitize_for_log(e.message),
                )
                continue
            descriptor, added = self._add(pair[0], pair[1], directory, artifact_files)
            if added:
                discovered += 1
            found.add(descriptor)

        logger.info(
            "Discovered %d models: %s", discovered, ", ".join(sorted(self._descriptors.keys()))
        )
        return found

    def lookup(self, key: str) -> Optional[ModelDescriptor]:
        return self._descriptors.get(key)

    def has(self, key: str) -> bool:
        return self._descriptors.contains(key)

    def register(
        self, source_lang: str, target_lang: str, directory: Optional[str] = None
    ) -> ModelDescriptor:
        """Register a pair explicitly; an already-known key is returned unchanged."""
        source, target = normalize(source_lang), normalize(target_lang)
        if not is_valid_code(source) or not is_valid_code(target) or source == target:
            raise InvalidInputError(
                f"Invalid language pair: {sanitize_for_log(source_lang)} -> "
                f"{sanitize_for_log(target_lang)}"
            )
        key = pair_key(source, target)

        existing = self.lookup(key)
        if existing is not None:
            return existing

        if directory:
            directory = validate_safe_path(directory, self.allowed_dirs)
        else:
            directory = os.path.normpath(os.path.join(self.models_dir, key))
        logger.info("Registering model: %s from %s", key, sanitize_for_log(directory))
        artifact_files = inspect_directory(directory, self._rules)
        candidate = ModelDescriptor(
            key=key,
            source_lang=source,
            target_lang=target,
            artifact_dir=directory,
            artifact_files=artifact_files,
        )
        candidate.load_artifacts()
        descriptor, _ = self._descriptors.get_or_add(key, lambda: candidate)
        logger.info("Model registered: %s", key)
        return descriptor

    def preload(self) -> int:
        """Read artifact bytes for every descriptor; failures are logged and skipped."""
        loaded = 0
        for descriptor in self.list():
            if descriptor.is_loaded:
                continue
            try:
                descriptor.load_artifacts()
                loaded += 1
            except ModelNotAvailable as e:
                logger.error("Failed to preload %s: %s", descriptor.key, e.message)
        return loaded

    def list(self) -> List[ModelDescriptor]:
        return sorted(self._descriptors.values(), key=lambda d: d.key)

    def size(self) -> int:
        return self._descriptors.size()

    def _add(
        self,
        source: str,
        target: str,
        directory: str,
        artifact_files: Dict[ArtifactRole, str],
    ) -> Tuple[ModelDescriptor, bool]:
        return self._descriptors.get_or_add(
            pair_key(source, target),
            lambda: ModelDescriptor(
                key=pair_key(source, target),
                source_lang=source,
                target_lang=target,
                artifact_dir=directory,
                artifact_files=artifact_files,
            ),
        )
