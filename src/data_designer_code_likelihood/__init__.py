# SPDX-License-Identifier: Apache-2.0
"""AI code likelihood plugin for NeMo Data Designer.

Adds a ``code-likelihood`` column type that scores source code for patterns
typical of AI code generators using ten weighted heuristic modules, and can
rewrite the code so its reported score drops. No LLM calls, no API dependencies.

Usage::

    from data_designer_code_likelihood import CodeLikelihoodColumnConfig

    builder.add_column(CodeLikelihoodColumnConfig(
        name="ai_check",
        target_columns=["solution"],
        max_likelihood=60,
    ))
"""

from data_designer_code_likelihood.config import CodeLikelihoodColumnConfig
from data_designer_code_likelihood.core import Hyperparameters, analyze, classify
from data_designer_code_likelihood.rewriter import rewrite

__all__ = ["CodeLikelihoodColumnConfig", "analyze", "classify", "rewrite", "Hyperparameters"]
