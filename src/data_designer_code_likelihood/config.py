from __future__ import annotations

from typing import Literal

from pydantic import Field

from data_designer.config.column_configs import SingleColumnConfig


class CodeLikelihoodColumnConfig(SingleColumnConfig):
    """Score code columns for AI-generation patterns using heuristic analysis.

    Runs ten weighted scoring modules against each row's code and produces a
    likelihood (0-100), a label, a size-based confidence, and the detected language.
    Optionally rewrites the code to lower its score.

    Attributes:
        target_columns: Columns whose text content will be concatenated and scored.
        max_likelihood: Rows scoring strictly below this are ``is_valid=True``.
            Defaults to 60 (the start of the "High AI likelihood" label).
        include_reasons: Include the deduplicated reason strings in output.
        include_breakdown: Include the per-module score breakdown in output.
        rewrite: Also emit rewritten code and its reported likelihood.
    """

    target_columns: list[str]
    max_likelihood: int = Field(default=60, ge=0, le=100, description="Rows scoring below this are is_valid=True")
    include_reasons: bool = Field(default=True, description="Include reason strings in output")
    include_breakdown: bool = Field(default=False, description="Include per-module scores in output")
    rewrite: bool = Field(default=False, description="Emit rewritten code with a lower reported likelihood")
    column_type: Literal["code-likelihood"] = "code-likelihood"

    @staticmethod
    def get_column_emoji() -> str:
        return "\U0001f50e"

    @property
    def required_columns(self) -> list[str]:
        return self.target_columns

    @property
    def side_effect_columns(self) -> list[str]:
        return []
