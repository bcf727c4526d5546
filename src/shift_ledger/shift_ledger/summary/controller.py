from __future__ import annotations

from flask import Flask, request

from ..common.datetime_utils import month_key, parse_year_month
from ..common.http import current_identity, ok, require_admin
from ..container import Container


def register(app: Flask, container: Container) -> None:
    def _target():
        identity = current_identity(container.identity_resolver)
        year_month = request.args.get("month") or month_key(container.clock().date())
        parse_year_month(year_month)

        employee_id = request.args.get("employee_id") or identity.employee_id
        if employee_id != identity.employee_id:
            require_admin(identity)
        return employee_id, year_month

    @app.route("/api/summary", methods=["GET"], endpoint="monthly_summary")
    def monthly_summary():
        employee_id, year_month = _target()
        summary = container.summary_service.summarize(employee_id, year_month)
        return ok("OK", summary=summary.to_dict())

    @app.route("/api/payroll", methods=["GET"], endpoint="payroll_estimate")
    def payroll_estimate():
        employee_id, year_month = _target()
        estimate = container.payroll_estimator.estimate_for_employee(employee_id, year_month)
        return ok("OK", payroll=estimate.to_dict())
