from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from data_designer.engine.column_generators.generators.base import ColumnGeneratorFullColumn

from data_designer_code_likelihood.config import CodeLikelihoodColumnConfig
from data_designer_code_likelihood.core import analyze, classify
from data_designer_code_likelihood.rewriter import rewrite

if TYPE_CHECKING:
    import pandas as pd

logger = logging.getLogger(__name__)


def score_code(code: str, config: CodeLikelihoodColumnConfig) -> dict:
    """Build the per-row output payload for one piece of code."""
    rewritten = rewrite(code) if config.rewrite else None
    analysis = rewritten.before if rewritten is not None else analyze(code)
    output: dict = {
        "is_valid": analysis.likelihood < config.max_likelihood,
        "ai_likelihood": analysis.likelihood,
        "ai_label": classify(analysis),
        "confidence": analysis.confidence,
        "language": analysis.language,
    }
    if config.include_reasons:
        output["reasons"] = list(analysis.reasons)
    if config.include_breakdown:
        output["breakdown"] = {name: res.to_payload() for name, res in analysis.breakdown}
    if rewritten is not None:
        output["rewritten_code"] = rewritten.rewritten
        output["rewritten_likelihood"] = rewritten.after.likelihood
    return output


def score_frame(data: pd.DataFrame, config: CodeLikelihoodColumnConfig) -> pd.DataFrame:
    """Score every row's target columns, joined by newlines, into a copy of ``data``."""
    results = []
    for _, row in data[config.target_columns].iterrows():
        code = "\n".join(str(v) for v in row.values if v is not None)
        results.append(score_code(code, config))

    data = data.copy()
    data[config.name] = results
    return data


class CodeLikelihoodColumnGenerator(ColumnGeneratorFullColumn[CodeLikelihoodColumnConfig]):
    """Column generator that scores code for AI-generation patterns via heuristic analysis."""

    def generate(self, data: pd.DataFrame) -> pd.DataFrame:
        logger.info(f"\U0001f50e Scoring column {self.config.name!r} for AI code likelihood")
        logger.info(f"   target columns: {self.config.target_columns}")
        logger.info(f"   max_likelihood: {self.config.max_likelihood}")
        if self.config.rewrite:
            logger.info("   rewrite: enabled")
        return score_frame(data, self.config)
