from __future__ import annotations

from flask import Flask, jsonify, request

from ..common.responses import notice_response
from ..container import Container


def register(app: Flask, container: Container) -> None:
    dashboard = container.dashboard_service

    def _payload() -> dict:
        return request.get_json(silent=True) or request.form.to_dict()

    @app.route("/api/employees", methods=["GET"], endpoint="employees")
    def employees():
        if request.args.get("reload") == "1":
            notice = dashboard.load_employees()
            if notice:
                return notice_response(notice)
        view = dashboard.dashboard_view()
        return jsonify({"success": True, "employees": view["employees"], "employee_id": view["employee_id"]})

    @app.route("/api/employees/select", methods=["POST"], endpoint="employees_select")
    def employees_select():
        employee_id = str(_payload().get("employee_id") or "").strip()
        notice = dashboard.select_employee(employee_id)
        if notice:
            return notice_response(notice)
        return jsonify({"success": True, **dashboard.dashboard_view()})

    @app.route("/api/year", methods=["POST"], endpoint="year_select")
    def year_select():
        try:
            year = int(_payload().get("year"))
        except (TypeError, ValueError):
            return jsonify({"success": False, "level": "error", "message": "Invalid year"}), 400
        notice = dashboard.select_year(year)
        if notice:
            return notice_response(notice)
        return jsonify({"success": True, **dashboard.dashboard_view()})

    @app.route("/api/dashboard", methods=["GET"], endpoint="dashboard")
    def dashboard_page():
        return jsonify({"success": True, **dashboard.dashboard_view()})

    @app.route("/api/clock", methods=["GET"], endpoint="clock")
    def clock():
        return jsonify(dashboard.clock_view())
