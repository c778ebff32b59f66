from typing import Any, Dict

from loginflow.app.use_cases.auth.dtos import View


def render_json(view: View) -> Dict[str, Any]:
    """Default renderer: the view as a JSON document, errors split from notices"""
    return {
        "view": view.name,
        "title": view.title,
        "locale": view.locale,
        "interim_login": view.interim_login,
        "errors": [{"code": d.code, "message": d.message} for d in view.errors.blocking()],
        "messages": [
            {"code": d.code, "message": d.message} for d in view.errors.informational()
        ],
        "data": view.data,
    }
