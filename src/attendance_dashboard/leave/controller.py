from __future__ import annotations

from flask import Flask, jsonify, request

from ..common.responses import notice_response
from ..container import Container


def register(app: Flask, container: Container) -> None:
    dashboard = container.dashboard_service

    def _payload() -> dict:
        return request.get_json(silent=True) or request.form.to_dict()

    @app.route("/api/leaves", methods=["GET"], endpoint="leaves")
    def leaves():
        return jsonify({"success": True, **dashboard.leaves_view(), "summary": dashboard.leave_summary()})

    @app.route("/api/leaves/request", methods=["POST"], endpoint="leaves_request")
    def leaves_request():
        return notice_response(dashboard.request_leave(_payload()))

    @app.route("/api/settings", methods=["GET"], endpoint="settings")
    def settings():
        return jsonify({"success": True, **dashboard.settings_view()})

    @app.route("/api/settings/quotas", methods=["POST"], endpoint="settings_quotas")
    def settings_quotas():
        return notice_response(dashboard.save_quotas(_payload()))

    @app.route("/api/settings/year-start", methods=["POST"], endpoint="settings_year_start")
    def settings_year_start():
        return notice_response(dashboard.update_year_start(str(_payload().get("year_start_date") or "")))

    @app.route("/api/settings/yearly-reset", methods=["POST"], endpoint="settings_yearly_reset")
    def settings_yearly_reset():
        return notice_response(dashboard.yearly_reset(), year=dashboard.state.year)

    @app.route("/api/settings/test-connection", methods=["POST"], endpoint="settings_test_connection")
    def settings_test_connection():
        return notice_response(dashboard.test_connection())
