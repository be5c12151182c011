from __future__ import annotations

from flask import Flask, jsonify

from ..common.http import json_api
from ..container import Container


def register(app: Flask, container: Container) -> None:
    @app.route("/api/members/<member_id>", methods=["DELETE"], endpoint="api_member_delete")
    @json_api
    def api_member_delete(member_id: str):
        container.member_service.delete_member(member_id)
        return jsonify({"success": True, "message": "Member deleted successfully"}), 200
