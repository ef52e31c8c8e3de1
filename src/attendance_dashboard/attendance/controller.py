from __future__ import annotations

from flask import Flask, jsonify, request

from ..common.responses import notice_response
from ..container import Container
from ..core.enums import SortColumn, SortDirection
from ..attendance.filters import SortSpec


def register(app: Flask, container: Container) -> None:
    dashboard = container.dashboard_service

    def _payload() -> dict:
        return request.get_json(silent=True) or request.form.to_dict()

    @app.route("/api/attendance", methods=["GET"], endpoint="attendance_list")
    def attendance_list():
        return jsonify({"success": True, **dashboard.attendance_view()})

    @app.route("/api/attendance", methods=["POST"], endpoint="attendance_save")
    def attendance_save():
        return notice_response(dashboard.save_attendance(_payload()))

    @app.route("/api/attendance/delete", methods=["POST"], endpoint="attendance_delete")
    def attendance_delete():
        work_date = str(_payload().get("date") or "")
        return notice_response(dashboard.delete_attendance(work_date))

    @app.route("/api/attendance/draft", methods=["GET"], endpoint="attendance_draft")
    def attendance_draft():
        draft, notice = dashboard.draft(request.args.get("action", "new"), request.args.get("date"))
        if notice:
            return notice_response(notice)
        return jsonify({"success": True, "draft": draft.as_dict()})

    @app.route("/api/attendance/filters", methods=["POST"], endpoint="attendance_filters")
    def attendance_filters():
        notice = dashboard.set_filters(_payload())
        if notice:
            return notice_response(notice)
        return jsonify({"success": True, **dashboard.attendance_view()})

    @app.route("/api/attendance/filters/clear", methods=["POST"], endpoint="attendance_filters_clear")
    def attendance_filters_clear():
        dashboard.clear_filters()
        return jsonify({"success": True, **dashboard.attendance_view()})

    @app.route("/api/attendance/sort", methods=["POST"], endpoint="attendance_sort")
    def attendance_sort():
        data = _payload()
        column = str(data.get("column") or "")
        direction = data.get("direction")
        if direction:
            # explicit direction, otherwise behave like a header click
            try:
                dashboard.set_sort(SortSpec(column=SortColumn(column), direction=SortDirection(direction)))
            except ValueError:
                return jsonify({"success": False, "level": "error", "message": "Invalid sort"}), 400
        else:
            notice = dashboard.sort_by(column)
            if notice:
                return notice_response(notice)
        return jsonify({"success": True, **dashboard.attendance_view()})

    @app.route("/api/attendance/page", methods=["POST"], endpoint="attendance_page")
    def attendance_page():
        data = _payload()
        move = data.get("move")
        if move == "next":
            dashboard.next_page()
        elif move == "prev":
            dashboard.prev_page()
        else:
            try:
                dashboard.go_to_page(int(data.get("page")))
            except (TypeError, ValueError):
                return jsonify({"success": False, "level": "error", "message": "Invalid page"}), 400
        return jsonify({"success": True, **dashboard.attendance_view()})

    @app.route("/api/attendance/export.csv", methods=["GET"], endpoint="attendance_export")
    def attendance_export():
        result, notice = dashboard.export()
        if result is None:
            return notice_response(notice)
        filename, text = result
        return app.response_class(
            text.encode("utf-8-sig"),
            mimetype="text/csv",
            headers={"Content-Disposition": f"attachment; filename={filename}"},
        )
