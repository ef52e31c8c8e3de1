from __future__ import annotations

from flask import jsonify

from ..dashboard.state import Notice


def notice_response(notice: Notice, **extra):
    """JSON body for a notice: 200 when ok, 502 for API failures, 400 otherwise."""
    body = notice.as_dict()
    body.update(extra)
    if notice.ok:
        status = 200
    elif notice.from_api:
        status = 502
    else:
        status = 400
    return jsonify(body), status
