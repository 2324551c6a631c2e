"""Unit tests for domain models and exceptions."""

from exchange_docs.domain.models import (
    Client,
    GenerationOptions,
    GenerationResult,
    OutputFormat,
    PeriodSummary,
    ValidationResult,
)
from exchange_docs.exceptions import DocumentError, RenderError, ValidationError


class TestValidationResult:
    """Tests for ValidationResult."""

    def test_valid_without_errors(self) -> None:
        assert ValidationResult(warnings=["minor"]).is_valid is True

    def test_invalid_with_errors(self) -> None:
        assert ValidationResult(errors=["broken"]).is_valid is False


class TestGenerationOptions:
    def test_defaults(self) -> None:
        options = GenerationOptions()
        assert options.output_format == OutputFormat.DATA_URI
        assert options.filename is None
        assert options.auto_download is False
        assert options.enable_validation is True
        assert options.modern_design is False
        assert options.force_client_side is False


class TestGenerationResult:
    def test_defaults(self) -> None:
        result = GenerationResult(success=False, content_type="application/pdf")
        assert result.artifact is None
        assert result.warnings == []
        assert result.degraded is False
        assert result.saved_path is None


class TestDefaults:
    def test_client_country(self) -> None:
        assert Client(id=1, name="Ana", email="ana@example.com").country == "España"

    def test_empty_summary(self) -> None:
        summary = PeriodSummary()
        assert summary.count == 0
        assert summary.avg_profit_percentage == 0


class TestExceptions:
    def test_validation_error_joins_errors(self) -> None:
        error = ValidationError(["a is required", "b is required"], ["c is odd"])
        assert str(error) == "a is required, b is required"
        assert error.warnings == ["c is odd"]
        assert isinstance(error, DocumentError)

    def test_render_error_is_document_error(self) -> None:
        assert issubclass(RenderError, DocumentError)
