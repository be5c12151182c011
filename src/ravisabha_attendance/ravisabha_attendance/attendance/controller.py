from __future__ import annotations

from flask import Flask, current_app, jsonify, request

from ..common.datetime_utils import now_local
from ..common.http import json_api, json_body
from ..container import Container
from ..export.csv_serializer import csv_filename, serialize_csv
from ..views.engine import Filters, SortConfig, ViewState, apply_filters, compute_view, sort_records
from .scope import Scope, resolve_range_preset, resolve_scope


def register(app: Flask, container: Container) -> None:
    def _scope_from_args() -> Scope:
        args = request.args
        return resolve_scope(
            session_ref=args.get("ravisabhaId"),
            start_date=args.get("startDate"),
            end_date=args.get("endDate"),
            date=args.get("date"),
            month=args.get("month"),
            year=args.get("year"),
        )

    def _view_state_from_args() -> ViewState:
        try:
            page = int((request.args.get("page") or "1").strip())
        except ValueError:
            page = 1
        return ViewState(
            filters=Filters.from_args(request.args),
            sort=SortConfig.from_args(request.args),
            page=page,
        )

    @app.route("/api/attendance", methods=["POST"], endpoint="api_attendance_create")
    @json_api
    def api_attendance_create():
        data = json_body()
        attendance_id = container.attendance_service.mark_attendance(
            member_id=data.get("memberId"),
            status=data.get("status"),
            session_ref=data.get("ravisabhaId"),
        )
        return jsonify({"success": True, "message": "Attendance saved successfully", "id": attendance_id}), 201

    @app.route("/api/attendance", methods=["GET"], endpoint="api_attendance_list")
    @json_api
    def api_attendance_list():
        scope = _scope_from_args()
        records = container.attendance_service.fetch_records(scope)
        return jsonify({"scope": scope.describe(), "records": [r.to_dict() for r in records]}), 200

    @app.route("/api/attendance/view", methods=["GET"], endpoint="api_attendance_view")
    @json_api
    def api_attendance_view():
        scope = _scope_from_args()
        state = _view_state_from_args()
        records = container.attendance_service.fetch_records(scope)
        result = compute_view(records, state, page_size=container.settings.page_size)
        return jsonify({"scope": scope.describe(), **result.to_dict()}), 200

    @app.route("/api/attendance/stats", methods=["GET"], endpoint="api_attendance_stats")
    @json_api
    def api_attendance_stats():
        summary = container.attendance_service.gender_counts(_scope_from_args())
        return jsonify(summary.to_dict()), 200

    @app.route("/api/attendance/export.csv", methods=["GET"], endpoint="api_attendance_export")
    @json_api
    def api_attendance_export():
        preset = request.args.get("range")
        if preset:
            scope = resolve_range_preset(
                preset,
                today=now_local().date(),
                start_date=request.args.get("startDate"),
                end_date=request.args.get("endDate"),
            )
        else:
            scope = _scope_from_args()

        state = _view_state_from_args()
        records = container.attendance_service.fetch_records(scope)
        ordered = sort_records(apply_filters(records, state.filters), state.sort)

        body = serialize_csv(ordered, extended=container.settings.extended_csv_export)
        if scope.is_session:
            filename = f"attendance_ravisabha_{scope.session_ref}.csv"
        else:
            filename = csv_filename(scope.start.date(), scope.end.date())
        current_app.logger.info("exported %d attendance rows as %s", len(ordered), filename)

        return app.response_class(
            body.encode("utf-8-sig"),
            mimetype="text/csv",
            headers={"Content-Disposition": f"attachment; filename={filename}"},
        )

    @app.route("/api/attendance/<record_id>", methods=["PATCH"], endpoint="api_attendance_status")
    @json_api
    def api_attendance_status(record_id: str):
        data = json_body()
        if data.get("toggle"):
            status = container.attendance_service.toggle_status(record_id, data.get("current"))
        else:
            status = container.attendance_service.set_status(record_id, data.get("status"))
        return jsonify({"success": True, "status": status.label}), 200

    @app.route("/api/attendance/<record_id>", methods=["DELETE"], endpoint="api_attendance_delete")
    @json_api
    def api_attendance_delete(record_id: str):
        container.attendance_service.delete_record(record_id)
        return jsonify({"success": True, "message": "Record deleted successfully"}), 200
