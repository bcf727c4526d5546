from __future__ import annotations

from flask import Flask

from ..common.http import current_identity, json_body, ok
from ..container import Container
from ..core.exceptions import ValidationError


def register(app: Flask, container: Container) -> None:
    @app.route("/api/dialog/makeup", methods=["POST"], endpoint="makeup_dialog")
    def makeup_dialog():
        """One turn of the makeup dialog: ``{"step": start|shift|action|reason|cancel, "value": ...}``."""

        identity = current_identity(container.identity_resolver)
        data = json_body()
        step = data.get("step")
        value = data.get("value")
        dialogs = container.makeup_dialog

        if step == "start":
            state = dialogs.start(identity)
        elif step == "shift":
            state = dialogs.choose_shift(identity, value)
        elif step == "action":
            state = dialogs.choose_action(identity, value)
        elif step == "reason":
            req = dialogs.submit_reason(identity, value or "")
            return ok("Makeup request submitted, waiting for approval", 201, state=None, request=req.to_payload())
        elif step == "cancel":
            dialogs.cancel(identity)
            return ok("Makeup dialog cancelled", state=None)
        else:
            raise ValidationError("step must be one of: start, shift, action, reason, cancel")

        return ok("OK", state=state.to_dict())
