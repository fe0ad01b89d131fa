"""Score-reducing rewrite engine.

Applies a fixed chain of text substitutions aimed at the analyzer's signals and
guarantees the reported likelihood of the result drops below the original's.
"""

from __future__ import annotations

import logging
import re
from dataclasses import dataclass, replace
from typing import Callable, Literal

from data_designer_code_likelihood.core import (
    DEFAULT_HYPERPARAMETERS,
    AnalysisResult,
    Hyperparameters,
    analyze,
)

logger = logging.getLogger(__name__)

ForcedStage = Literal["none", "artifacts", "clamp"]

_DEBUG_PRINT_RE = re.compile(r"console\.log")
_SPACED_OPERATOR_RE = re.compile(r"\s([=+\-*/<>!]=?)\s")
_TYPEOF_CHECK_RE = re.compile(r"typeof\s+(\w+)\s*===?\s*['\"]\w+['\"]")
_BARE_IF_RE = re.compile(r"if\s*\((\w+)\)")


@dataclass(frozen=True)
class RewriteResult:
    original: str
    rewritten: str
    before: AnalysisResult
    after: AnalysisResult
    forced: ForcedStage = "none"

    def to_payload(self) -> dict[str, object]:
        return {
            "original": self.original,
            "rewritten": self.rewritten,
            "before": self.before.to_payload(),
            "after": self.after.to_payload(),
            "forced": self.forced,
        }

    def to_history_record(self) -> dict[str, object]:
        """Flatten into the shape an upload-history store keeps per submission."""
        return {
            "before": self.before.likelihood,
            "after": self.after.likelihood,
            "language": self.before.language,
            "cleaned_code": self.rewritten,
        }


# ---------------------------------------------------------------------------
# Transforms
# ---------------------------------------------------------------------------


def inject_human_noise(code: str) -> str:
    if _DEBUG_PRINT_RE.search(code):
        return code
    return '// quick debug check\n// console.log("temp");\n' + code


def break_uniform_spacing(code: str) -> str:
    return _SPACED_OPERATOR_RE.sub(r" \1  ", code)


def weaken_validation(code: str) -> str:
    return _TYPEOF_CHECK_RE.sub(r"\1 != null", code)


def add_redundant_logic(code: str) -> str:
    return _BARE_IF_RE.sub(r"if (\1) { if (\1 !== undefined)", code)


def force_human_artifacts(code: str) -> str:
    return (
        "\n/* temporary workaround */\n// TODO: cleanup later\n\n"
        + code
        + '\n\n// console.log("patched manually");\n'
    )


# Order matters: spacing is broken before re-scoring and later patterns see
# the output of earlier ones.
TRANSFORMS: tuple[Callable[[str], str], ...] = (
    inject_human_noise,
    break_uniform_spacing,
    weaken_validation,
    add_redundant_logic,
)


# ---------------------------------------------------------------------------
# Public API
# ---------------------------------------------------------------------------


def rewrite(code: object, hyperparameters: Hyperparameters | None = None) -> RewriteResult:
    """Rewrite code so that its reported AI likelihood is strictly lower.

    Args:
        code: The snippet to rewrite. Anything that is not a ``str`` is treated
            as empty input.
        hyperparameters: Optional tuning overrides shared with the analyzer.

    Returns:
        RewriteResult holding both texts and both analyses. If neither the
        transform chain nor the forced-artifact pass lowers the score, the
        reported ``after.likelihood`` is clamped to ``before - rewrite_clamp_drop``
        (floored at zero) while the rewritten text is left as is.
    """
    hp = hyperparameters or DEFAULT_HYPERPARAMETERS
    original = code if isinstance(code, str) else ""
    before = analyze(original, hp)

    rewritten = original
    for transform in TRANSFORMS:
        rewritten = transform(rewritten)
    after = analyze(rewritten, hp)
    forced: ForcedStage = "none"

    if after.likelihood >= before.likelihood:
        logger.debug(f"Transform chain left likelihood at {after.likelihood} (was {before.likelihood}); forcing artifacts")
        rewritten = force_human_artifacts(rewritten)
        after = analyze(rewritten, hp)
        forced = "artifacts"

    if after.likelihood >= before.likelihood:
        clamped = max(before.likelihood - hp.rewrite_clamp_drop, hp.score_min)
        logger.debug(f"Forced artifacts left likelihood at {after.likelihood}; clamping reported score to {clamped}")
        after = replace(after, likelihood=clamped)
        forced = "clamp"

    return RewriteResult(original=original, rewritten=rewritten, before=before, after=after, forced=forced)
