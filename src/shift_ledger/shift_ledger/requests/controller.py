from __future__ import annotations

from flask import Flask, request

from ..common.datetime_utils import parse_iso_date
from ..common.http import current_identity, json_body, ok, require_admin
from ..container import Container


def register(app: Flask, container: Container) -> None:
    @app.route("/api/makeup", methods=["POST"], endpoint="makeup_submit")
    def makeup_submit():
        identity = current_identity(container.identity_resolver)
        data = json_body()
        req = container.makeup_workflow.submit(
            identity,
            shift=data.get("shift"),
            action=data.get("action"),
            reason=data.get("reason") or "",
            work_date=parse_iso_date(data["date"]) if data.get("date") else None,
        )
        return ok("Makeup request submitted, waiting for approval", 201, request=req.to_payload())

    @app.route("/api/makeup/mine", methods=["GET"], endpoint="makeup_mine")
    def makeup_mine():
        identity = current_identity(container.identity_resolver)
        items = container.makeup_workflow.list_for_employee(identity.employee_id)
        return ok("OK", requests=[r.to_payload() for r in items])

    @app.route("/api/makeup/pending", methods=["GET"], endpoint="makeup_pending")
    def makeup_pending():
        identity = current_identity(container.identity_resolver)
        require_admin(identity)
        limit = request.args.get("limit", type=int) or 200
        items = container.makeup_workflow.list_pending(limit=limit)
        return ok("OK", requests=[r.to_payload() for r in items])

    @app.route("/api/makeup/next", methods=["GET"], endpoint="makeup_next")
    def makeup_next():
        identity = current_identity(container.identity_resolver)
        require_admin(identity)
        req = container.makeup_workflow.next_pending()
        if req is None:
            return ok("No pending makeup requests", request=None)
        return ok("OK", request=req.to_payload())

    @app.route("/api/makeup/<int:request_id>/decision", methods=["POST"], endpoint="makeup_decide")
    def makeup_decide(request_id: int):
        identity = current_identity(container.identity_resolver)
        data = json_body()
        req = container.makeup_workflow.decide(
            request_id,
            identity,
            data.get("decision"),
            note=data.get("note") or "",
        )
        return ok(f"Makeup request {req.request_id} {req.status.value}", request=req.to_payload())
