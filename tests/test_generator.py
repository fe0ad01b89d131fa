import pytest

pytest.importorskip("data_designer")
pd = pytest.importorskip("pandas")

from pydantic import ValidationError  # noqa: E402

from data_designer_code_likelihood.config import CodeLikelihoodColumnConfig  # noqa: E402
from data_designer_code_likelihood.generator import score_code, score_frame  # noqa: E402

from test_core import AI_SNIPPET, IDENTIFIER_SOUP  # noqa: E402


def _config(**overrides) -> CodeLikelihoodColumnConfig:
    return CodeLikelihoodColumnConfig(name="ai_check", target_columns=["solution"], **overrides)


class TestConfig:
    def test_defaults(self):
        config = _config()
        assert config.column_type == "code-likelihood"
        assert config.max_likelihood == 60
        assert config.include_reasons is True
        assert config.include_breakdown is False
        assert config.rewrite is False
        assert config.required_columns == ["solution"]
        assert config.side_effect_columns == []

    @pytest.mark.parametrize("value", [-1, 101])
    def test_max_likelihood_bounds(self, value):
        with pytest.raises(ValidationError):
            _config(max_likelihood=value)


class TestScoreCode:
    def test_default_payload(self):
        output = score_code(AI_SNIPPET, _config())
        assert output == {
            "is_valid": False,
            "ai_likelihood": 64,
            "ai_label": "High AI likelihood",
            "confidence": 75.0,
            "language": "javascript",
            "reasons": output["reasons"],
        }
        assert "Markdown artifacts" in output["reasons"]

    def test_low_score_is_valid(self):
        output = score_code(IDENTIFIER_SOUP, _config(include_reasons=False))
        assert output["is_valid"] is True
        assert output["ai_label"] == "Minimal AI indicators"
        assert "reasons" not in output

    def test_threshold_is_exclusive(self):
        assert score_code(AI_SNIPPET, _config(max_likelihood=64))["is_valid"] is False
        assert score_code(AI_SNIPPET, _config(max_likelihood=65))["is_valid"] is True

    def test_breakdown(self):
        output = score_code(AI_SNIPPET, _config(include_breakdown=True))
        assert output["breakdown"]["ai_artifacts"] == {
            "score": 16,
            "max_score": 18,
            "reasons": ["Markdown artifacts", "Tutorial-style phrasing"],
        }
        assert len(output["breakdown"]) == 10

    def test_rewrite(self):
        output = score_code(AI_SNIPPET, _config(rewrite=True))
        assert output["ai_likelihood"] == 64
        assert output["rewritten_likelihood"] == 51
        assert output["rewritten_code"].startswith("// quick debug check")

    def test_rewrite_reuses_baseline_analysis(self, monkeypatch):
        from data_designer_code_likelihood import generator

        def _fail(*args, **kwargs):
            raise AssertionError("analyze should not run separately when rewriting")

        monkeypatch.setattr(generator, "analyze", _fail)
        assert score_code(AI_SNIPPET, _config(rewrite=True))["ai_likelihood"] == 64

    def test_insufficient_code(self):
        output = score_code("x = 1", _config(include_breakdown=True))
        assert output["ai_likelihood"] == 0
        assert output["confidence"] == 0
        assert output["language"] == "unknown"
        assert output["reasons"] == ["Insufficient code"]
        assert output["breakdown"] == {}


class TestScoreFrame:
    def test_joins_target_columns_and_skips_missing_cells(self):
        data = pd.DataFrame(
            {
                "solution": [AI_SNIPPET, IDENTIFIER_SOUP],
                "notes": ["// TODO: tidy this up", None],
                "author": ["a", "b"],
            },
            dtype=object,
        )
        config = CodeLikelihoodColumnConfig(name="ai_check", target_columns=["solution", "notes"], rewrite=True)

        scored = score_frame(data, config)

        assert list(scored["ai_check"]) == [
            score_code(AI_SNIPPET + "\n// TODO: tidy this up", config),
            score_code(IDENTIFIER_SOUP, config),
        ]
        assert scored["ai_check"][0]["ai_likelihood"] < 64
        assert "rewritten_code" in scored["ai_check"][1]
        assert list(scored["author"]) == ["a", "b"]

    def test_input_frame_is_not_modified(self):
        data = pd.DataFrame({"solution": [AI_SNIPPET]}, dtype=object)
        scored = score_frame(data, _config())
        assert "ai_check" not in data.columns
        assert list(scored.columns) == ["solution", "ai_check"]
        assert scored["ai_check"][0]["ai_likelihood"] == 64
