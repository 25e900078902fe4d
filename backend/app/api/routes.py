"""HTTP routes for the Flask API."""

from datetime import datetime
from http import HTTPStatus
from typing import Any, Dict

from flask import Blueprint, current_app, jsonify, request
from pydantic import ValidationError

from backend.core.errors import AuthenticationRequiredError, InvestmentError
from backend.core.health import get_health
from backend.core.logging import get_logger
from backend.core.returns import calculate_returns
from backend.schemas.investment import (
    CreateInvestmentRequest,
    DashboardStatsResponse,
    InvestmentView,
    PackageView,
    TransactionListResponse,
    TransactionQuery,
)
from backend.schemas.returns import ReturnsRequest
from backend.services.investments import InvestmentService

logger = get_logger(__name__)

api_bp = Blueprint("api", __name__)

USER_HEADER = "X-User-Id"


@api_bp.errorhandler(ValidationError)
def _handle_validation_error(exc: ValidationError):
    """Convert Pydantic validation errors into JSON responses."""
    return jsonify({"detail": exc.errors(include_url=False, include_context=False)}), HTTPStatus.UNPROCESSABLE_ENTITY


@api_bp.errorhandler(InvestmentError)
def _handle_investment_error(exc: InvestmentError):
    return jsonify({"error": exc.message}), exc.status


def _service() -> InvestmentService:
    return current_app.extensions["investment_service"]


def _now() -> datetime:
    return current_app.extensions["clock"]()


def _current_user_id() -> int:
    """User id resolved upstream by the auth layer and forwarded as a header."""
    raw = request.headers.get(USER_HEADER, "").strip()
    if not (raw.isascii() and raw.isdigit()) or int(raw) < 1:
        raise AuthenticationRequiredError()
    return int(raw)


def _json_body() -> Dict[str, Any]:
    payload = request.get_json(force=True, silent=True)
    return payload if isinstance(payload, dict) else {}


@api_bp.get("/ping")
def ping() -> Any:
    """Health-check endpoint."""
    response = get_health(current_app.extensions["database"])
    return jsonify(response.model_dump())


@api_bp.get("/packages")
def list_packages() -> Any:
    packages = [PackageView.from_domain(package).model_dump() for package in _service().list_packages()]
    return jsonify({"packages": packages})


@api_bp.get("/investments")
def list_investments() -> Any:
    """All investments of the caller with their accrued returns."""
    user_id = _current_user_id()
    rows = _service().list_investments(user_id, _now())
    investments = [InvestmentView.from_accrual(record, accrual).model_dump(mode="json") for record, accrual in rows]
    return jsonify({"investments": investments})


@api_bp.post("/investments")
def create_investment() -> Any:
    user_id = _current_user_id()
    payload = CreateInvestmentRequest.model_validate(_json_body())
    record, accrual = _service().create_investment(user_id, payload.packageId, payload.amount, _now())
    view = InvestmentView.from_accrual(record, accrual)
    return jsonify(view.model_dump(mode="json")), HTTPStatus.CREATED


@api_bp.post("/investments/calculate")
def calculate() -> Any:
    """Project a monthly-compounded investment."""
    _current_user_id()
    payload = ReturnsRequest.model_validate(_json_body())
    return jsonify(calculate_returns(payload).model_dump())


@api_bp.get("/investments/<int:investment_id>")
def get_investment(investment_id: int) -> Any:
    user_id = _current_user_id()
    record, accrual = _service().get_investment(user_id, investment_id, _now())
    return jsonify(InvestmentView.from_accrual(record, accrual).model_dump(mode="json"))


@api_bp.post("/investments/<int:investment_id>/cancel")
def cancel_investment(investment_id: int) -> Any:
    user_id = _current_user_id()
    _service().cancel_investment(user_id, investment_id, _now())
    return jsonify({"success": True})


@api_bp.get("/dashboard/stats")
def dashboard_stats() -> Any:
    """Portfolio totals plus the daily profit series for the chart."""
    user_id = _current_user_id()
    summary, signals = _service().dashboard(user_id, _now())
    response = DashboardStatsResponse.from_summary(summary, signals)
    return jsonify(response.model_dump(mode="json"))


@api_bp.get("/transactions")
def list_transactions() -> Any:
    user_id = _current_user_id()
    settings = current_app.config["SETTINGS"]
    query = TransactionQuery.model_validate(
        {
            "page": request.args.get("page", 1),
            "limit": request.args.get("limit", settings.DEFAULT_PAGE_SIZE),
            "type": request.args.get("type") or None,
        }
    )
    page = _service().list_transactions(
        user_id,
        page=query.page,
        limit=min(query.limit, settings.MAX_PAGE_SIZE),
        type=query.type,
    )
    return jsonify(TransactionListResponse.from_page(page).model_dump(mode="json"))
