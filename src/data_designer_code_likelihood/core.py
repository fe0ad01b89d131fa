# Heuristic AI-likelihood scorer for source code.
#
# Tokenizes a snippet once, runs ten independent scoring modules over the shared
# context and folds their weighted results into a 0-100 likelihood with reasons.

from __future__ import annotations

import math
import re
from dataclasses import dataclass
from typing import Callable, Sequence

# ---------------------------------------------------------------------------
# Hyperparameters
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class Hyperparameters:
    """Tunable thresholds, weights, and increments used by the analyzer and rewriter."""

    min_code_chars: int = 30

    confidence_base: float = 50.0
    confidence_per_line: float = 0.5
    confidence_max: float = 95.0

    weights: tuple[tuple[str, float], ...] = (
        ("comments", 1.2),
        ("naming", 1.0),
        ("structure", 1.3),
        ("completeness", 1.1),
        ("error_handling", 0.9),
        ("ai_artifacts", 1.5),
        ("entropy", 1.0),
        ("idioms", 0.8),
        ("debug_absence", 1.2),
        ("statistical_patterns", 1.0),
    )

    comment_phrase_ratio: float = 0.4
    comment_phrase_points: int = 10
    comment_density_ratio: float = 0.3
    comment_density_points: int = 5

    long_identifier_chars: int = 15
    long_identifier_ratio: float = 0.2
    long_identifier_points: int = 5
    generic_identifier_ratio: float = 0.4
    generic_identifier_points: int = 4

    structure_min_functions: int = 3
    structure_max_lines: int = 150
    structure_points: int = 6
    uniform_min_bodies: int = 3
    uniform_cv_threshold: float = 0.25
    uniform_points: int = 4

    validation_min_checks: int = 3
    validation_points: int = 6

    try_min_blocks: int = 2
    try_points: int = 6

    markdown_points: int = 10
    tutorial_points: int = 6

    entropy_threshold: float = 4.1
    entropy_min_chars: int = 200
    entropy_points: int = 6

    idiom_points: int = 6

    debug_absence_points: int = 8

    spacing_min_operators: int = 10
    spacing_points: int = 4

    rewrite_clamp_drop: int = 15

    score_min: int = 0
    score_max: int = 100
    label_very_high_min: int = 80
    label_high_min: int = 60
    label_moderate_min: int = 40
    label_low_min: int = 20


DEFAULT_HYPERPARAMETERS = Hyperparameters()


# ---------------------------------------------------------------------------
# Dataclasses
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class AnalysisContext:
    code: str
    lines: tuple[str, ...]
    non_empty_lines: tuple[str, ...]
    trimmed_lines: tuple[str, ...]
    tokens: tuple[str, ...]
    language: str


@dataclass(frozen=True)
class ModuleResult:
    score: float
    max_score: float
    reasons: tuple[str, ...] = ()

    def to_payload(self) -> dict[str, object]:
        return {"score": self.score, "max_score": self.max_score, "reasons": list(self.reasons)}


@dataclass(frozen=True)
class AnalysisResult:
    likelihood: int
    confidence: float
    language: str
    reasons: tuple[str, ...]
    breakdown: tuple[tuple[str, ModuleResult], ...]

    def to_payload(self) -> dict[str, object]:
        return {
            "likelihood": self.likelihood,
            "confidence": self.confidence,
            "language": self.language,
            "reasons": list(self.reasons),
            "breakdown": {name: res.to_payload() for name, res in self.breakdown},
        }

    def module(self, name: str) -> ModuleResult:
        for module_name, res in self.breakdown:
            if module_name == name:
                return res
        raise KeyError(name)


@dataclass(frozen=True)
class Statistics:
    mean: float
    variance: float
    std_dev: float
    cv: float


_Module = Callable[[AnalysisContext, Hyperparameters], ModuleResult]

# ---------------------------------------------------------------------------
# Compiled patterns
# ---------------------------------------------------------------------------

# Strings have no escape handling and block comments do not nest.
_TOKEN_RE = re.compile(
    r"\b[a-zA-Z_][a-zA-Z0-9_]*\b"
    r"|[0-9]+\.?[0-9]*"
    r'|"[^"]*"'
    r"|'[^']*'"
    r"|`[^`]*`"
    r"|//.*"
    r"|/\*[\s\S]*?\*/"
    r"|[{}()\[\];,.<>=!+\-*/%&|^~?:@]"
)

_LANGUAGE_SIGNATURES: tuple[tuple[str, re.Pattern[str]], ...] = (
    ("python", re.compile(r"\bdef\b|\b__name__\b|import\s+\w+")),
    ("javascript", re.compile(r"\bconst\b|\blet\b|=>|\bfunction\b")),
    ("cpp", re.compile(r"#include|std::|cout|cin")),
    ("java", re.compile(r"\bpublic\s+class\b|System\.out")),
)

_AI_COMMENT_PHRASES = [
    re.compile(r"this function", re.IGNORECASE),
    re.compile(r"returns the", re.IGNORECASE),
    re.compile(r"responsible for", re.IGNORECASE),
    re.compile(r"used to", re.IGNORECASE),
    re.compile(r"handles the", re.IGNORECASE),
    re.compile(r"here'?s how", re.IGNORECASE),
    re.compile(r"for example", re.IGNORECASE),
]
_IDENTIFIER_RE = re.compile(r"^[a-zA-Z_][a-zA-Z0-9_]{2,}$")
_GENERIC_NAME_PARTS = ("data", "result", "value", "item", "count")
_FUNCTION_KEYWORD_RE = re.compile(r"\bfunction\b|\bdef\b")
_VALIDATION_RE = re.compile(r"typeof|instanceof|===\s*null")
_TRY_BLOCK_RE = re.compile(r"try\s*{")
_MARKDOWN_RE = re.compile(r"```|^\s*#\s+", re.MULTILINE)
_TUTORIAL_RE = re.compile(r"step\s+\d+|example:", re.IGNORECASE)
_WHITESPACE_RUN_RE = re.compile(r"\s+")
_IDIOM_RE = re.compile(r"\.map\(|\.filter\(|Promise\.all")
_DEBUG_RE = re.compile(r"console\.log|debugger|TODO|FIXME")
_SPACED_OPERATOR_RE = re.compile(r"\s[=+\-*/<>!]=?\s")

_INSUFFICIENT_CODE = "Insufficient code"

# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------


def tokenize(code: str) -> tuple[str, ...]:
    return tuple(m.group(0) for m in _TOKEN_RE.finditer(code))


def detect_language(code: str) -> str:
    for language, pattern in _LANGUAGE_SIGNATURES:
        if pattern.search(code):
            return language
    return "generic"


def calculate_entropy(text: str) -> float:
    """Shannon entropy of the character distribution, in bits."""
    if not text:
        return 0.0
    freq: dict[str, int] = {}
    for ch in text:
        freq[ch] = freq.get(ch, 0) + 1
    length = len(text)
    entropy = 0.0
    for count in freq.values():
        p = count / length
        entropy -= p * math.log2(p)
    return entropy


def get_statistics(values: Sequence[float]) -> Statistics:
    if not values:
        return Statistics(mean=0.0, variance=0.0, std_dev=0.0, cv=0.0)
    mean = sum(values) / len(values)
    variance = sum((v - mean) ** 2 for v in values) / len(values)
    std_dev = math.sqrt(variance)
    return Statistics(mean=mean, variance=variance, std_dev=std_dev, cv=std_dev / mean if mean else 0.0)


def extract_function_bodies(code: str) -> list[str]:
    """Collect brace-delimited blocks that start on a ``function`` or ``def`` line.

    A keyword line always restarts the buffer. Blocks whose braces never balance
    are dropped silently.
    """
    bodies: list[str] = []
    buf: list[str] = []
    depth = 0
    opened = False
    for line in code.split("\n"):
        if _FUNCTION_KEYWORD_RE.search(line):
            buf, depth, opened = [], 0, False
        elif not buf:
            continue
        buf.append(line)
        depth += line.count("{") - line.count("}")
        if depth > 0:
            opened = True
        elif opened and depth == 0:
            bodies.append("\n".join(buf))
            buf, opened = [], False
    return bodies


def build_context(code: str) -> AnalysisContext:
    lines = tuple(code.split("\n"))
    return AnalysisContext(
        code=code,
        lines=lines,
        non_empty_lines=tuple(line for line in lines if line.strip()),
        trimmed_lines=tuple(line.strip() for line in lines),
        tokens=tokenize(code),
        language=detect_language(code),
    )


def _round_half_up(value: float) -> int:
    return math.floor(value + 0.5)


def _deduplicate(items: list[str]) -> list[str]:
    seen: set[str] = set()
    out: list[str] = []
    for item in items:
        if item not in seen:
            seen.add(item)
            out.append(item)
    return out


def _result(score: float, max_score: float, reasons: list[str]) -> ModuleResult:
    return ModuleResult(score=min(score, max_score), max_score=max_score, reasons=tuple(reasons))


# ---------------------------------------------------------------------------
# Scoring modules — each is a pure function of the shared context
# ---------------------------------------------------------------------------


def _module_comments(ctx: AnalysisContext, hp: Hyperparameters) -> ModuleResult:
    comments = [line for line in ctx.trimmed_lines if line.startswith("//") or line.startswith("#")]
    score, reasons = 0, []
    if comments:
        matches = sum(1 for c in comments if any(p.search(c) for p in _AI_COMMENT_PHRASES))
        if matches / len(comments) > hp.comment_phrase_ratio:
            score += hp.comment_phrase_points
            reasons.append("AI-style explanatory comments")
        if len(comments) / len(ctx.non_empty_lines) > hp.comment_density_ratio:
            score += hp.comment_density_points
            reasons.append("High comment density")
    return _result(score, 15, reasons)


def _module_naming(ctx: AnalysisContext, hp: Hyperparameters) -> ModuleResult:
    unique = _deduplicate([t for t in ctx.tokens if _IDENTIFIER_RE.match(t)])
    score, reasons = 0, []
    if unique:
        long_names = [n for n in unique if len(n) >= hp.long_identifier_chars]
        if len(long_names) / len(unique) > hp.long_identifier_ratio:
            score += hp.long_identifier_points
            reasons.append("Overly descriptive identifiers")
        generic = [n for n in unique if any(g in n.lower() for g in _GENERIC_NAME_PARTS)]
        if len(generic) / len(unique) > hp.generic_identifier_ratio:
            score += hp.generic_identifier_points
            reasons.append("Generic variable naming")
    return _result(score, 12, reasons)


def _module_structure(ctx: AnalysisContext, hp: Hyperparameters) -> ModuleResult:
    score, reasons = 0, []
    funcs = len(_FUNCTION_KEYWORD_RE.findall(ctx.code))
    if funcs >= hp.structure_min_functions and len(ctx.non_empty_lines) < hp.structure_max_lines:
        score += hp.structure_points
        reasons.append("Prompt-like full solution structure")

    bodies = extract_function_bodies(ctx.code)
    if len(bodies) >= hp.uniform_min_bodies:
        lengths = [len(b.split("\n")) for b in bodies]
        if get_statistics(lengths).cv < hp.uniform_cv_threshold:
            score += hp.uniform_points
            reasons.append("Uniform function sizes")
    return _result(score, 14, reasons)


def _module_completeness(ctx: AnalysisContext, hp: Hyperparameters) -> ModuleResult:
    checks = len(_VALIDATION_RE.findall(ctx.code))
    if checks >= hp.validation_min_checks:
        return _result(hp.validation_points, 12, ["Excessive defensive validation"])
    return _result(0, 12, [])


def _module_error_handling(ctx: AnalysisContext, hp: Hyperparameters) -> ModuleResult:
    if len(_TRY_BLOCK_RE.findall(ctx.code)) >= hp.try_min_blocks:
        return _result(hp.try_points, 10, ["Over-engineered error handling"])
    return _result(0, 10, [])


def _module_ai_artifacts(ctx: AnalysisContext, hp: Hyperparameters) -> ModuleResult:
    score, reasons = 0, []
    if _MARKDOWN_RE.search(ctx.code):
        score += hp.markdown_points
        reasons.append("Markdown artifacts")
    if _TUTORIAL_RE.search(ctx.code):
        score += hp.tutorial_points
        reasons.append("Tutorial-style phrasing")
    return _result(score, 18, reasons)


def _module_entropy(ctx: AnalysisContext, hp: Hyperparameters) -> ModuleResult:
    entropy = calculate_entropy(_WHITESPACE_RUN_RE.sub(" ", ctx.code))
    if entropy < hp.entropy_threshold and len(ctx.code) > hp.entropy_min_chars:
        return _result(hp.entropy_points, 8, ["Low entropy pattern"])
    return _result(0, 8, [])


def _module_idioms(ctx: AnalysisContext, hp: Hyperparameters) -> ModuleResult:
    if _IDIOM_RE.search(ctx.code):
        return _result(hp.idiom_points, 10, ["Textbook idiomatic usage"])
    return _result(0, 10, [])


def _module_debug_absence(ctx: AnalysisContext, hp: Hyperparameters) -> ModuleResult:
    if not _DEBUG_RE.search(ctx.code):
        return _result(hp.debug_absence_points, 11, ["No debug artifacts"])
    return _result(0, 11, [])


def _module_statistical_patterns(ctx: AnalysisContext, hp: Hyperparameters) -> ModuleResult:
    if len(_SPACED_OPERATOR_RE.findall(ctx.code)) > hp.spacing_min_operators:
        return _result(hp.spacing_points, 10, ["Perfect operator spacing"])
    return _result(0, 10, [])


# ---------------------------------------------------------------------------
# Pipeline wiring
# ---------------------------------------------------------------------------

MODULES: tuple[tuple[str, _Module], ...] = (
    ("comments", _module_comments),
    ("naming", _module_naming),
    ("structure", _module_structure),
    ("completeness", _module_completeness),
    ("error_handling", _module_error_handling),
    ("ai_artifacts", _module_ai_artifacts),
    ("entropy", _module_entropy),
    ("idioms", _module_idioms),
    ("debug_absence", _module_debug_absence),
    ("statistical_patterns", _module_statistical_patterns),
)


def _aggregate(breakdown: tuple[tuple[str, ModuleResult], ...], hp: Hyperparameters) -> int:
    weights = dict(hp.weights)
    weighted = 0.0
    total_weight = 0.0
    for name, res in breakdown:
        weight = weights[name]
        weighted += (res.score / res.max_score) * weight
        total_weight += weight
    likelihood = _round_half_up((weighted / total_weight) * 100) if total_weight else 0
    return max(hp.score_min, min(hp.score_max, likelihood))


def _confidence(ctx: AnalysisContext, hp: Hyperparameters) -> float:
    return min(hp.confidence_base + len(ctx.non_empty_lines) * hp.confidence_per_line, hp.confidence_max)


def _insufficient() -> AnalysisResult:
    return AnalysisResult(likelihood=0, confidence=0, language="unknown", reasons=(_INSUFFICIENT_CODE,), breakdown=())


# ---------------------------------------------------------------------------
# Public API
# ---------------------------------------------------------------------------


def analyze(code: object, hyperparameters: Hyperparameters | None = None) -> AnalysisResult:
    """Score source code for AI-generation patterns.

    Args:
        code: The snippet to analyze. Anything that is not a ``str`` is treated
            as empty input.
        hyperparameters: Optional tuning overrides. Uses sensible defaults if omitted.

    Returns:
        AnalysisResult with likelihood (0-100), confidence, detected language,
        deduplicated reasons, and the per-module breakdown. Inputs shorter than
        ``min_code_chars`` after stripping get a zeroed result with no breakdown.
    """
    hp = hyperparameters or DEFAULT_HYPERPARAMETERS
    if not isinstance(code, str) or len(code.strip()) < hp.min_code_chars:
        return _insufficient()

    ctx = build_context(code)
    breakdown = tuple((name, module(ctx, hp)) for name, module in MODULES)
    reasons = [reason for _, res in breakdown for reason in res.reasons]

    return AnalysisResult(
        likelihood=_aggregate(breakdown, hp),
        confidence=_confidence(ctx, hp),
        language=ctx.language,
        reasons=tuple(_deduplicate(reasons)),
        breakdown=breakdown,
    )


def classify(result: AnalysisResult | int, hyperparameters: Hyperparameters | None = None) -> str:
    """Map a likelihood to its human-readable label."""
    hp = hyperparameters or DEFAULT_HYPERPARAMETERS
    likelihood = result.likelihood if isinstance(result, AnalysisResult) else result
    if likelihood >= hp.label_very_high_min:
        return "Very High AI likelihood"
    if likelihood >= hp.label_high_min:
        return "High AI likelihood"
    if likelihood >= hp.label_moderate_min:
        return "Moderate AI likelihood"
    if likelihood >= hp.label_low_min:
        return "Low AI likelihood"
    return "Minimal AI indicators"
