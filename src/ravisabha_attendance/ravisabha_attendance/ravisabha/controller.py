from __future__ import annotations

from flask import Flask, jsonify, request

from ..common.http import json_api, json_body
from ..container import Container


def register(app: Flask, container: Container) -> None:
    @app.route("/api/ravisabha", methods=["GET"], endpoint="api_ravisabha_list")
    @json_api
    def api_ravisabha_list():
        sessions = container.ravisabha_service.list_sessions(
            month=request.args.get("month"),
            year=request.args.get("year"),
            start_date=request.args.get("startDate"),
            end_date=request.args.get("endDate"),
        )
        return jsonify({"ravisabhas": [s.to_dict() for s in sessions]}), 200

    @app.route("/api/ravisabha", methods=["POST"], endpoint="api_ravisabha_create")
    @json_api
    def api_ravisabha_create():
        data = json_body()
        ravisabha_id = container.ravisabha_service.create(
            held_on=data.get("date"),
            prasad=data.get("prasad"),
            expense=data.get("expense"),
            yajman=data.get("yajman"),
            notes=data.get("notes"),
        )
        ravisabha = container.ravisabha_service.get(ravisabha_id)
        return jsonify({"message": "Ravisabha created successfully", "ravisabha": ravisabha.to_dict()}), 201

    @app.route("/api/ravisabha/<ravisabha_id>", methods=["GET"], endpoint="api_ravisabha_get")
    @json_api
    def api_ravisabha_get(ravisabha_id: str):
        return jsonify({"ravisabha": container.ravisabha_service.get(ravisabha_id).to_dict()}), 200

    @app.route("/api/ravisabha/<ravisabha_id>", methods=["PUT"], endpoint="api_ravisabha_update")
    @json_api
    def api_ravisabha_update(ravisabha_id: str):
        ravisabha = container.ravisabha_service.update(ravisabha_id, json_body())
        return jsonify({"message": "Ravisabha updated successfully", "ravisabha": ravisabha.to_dict()}), 200

    @app.route("/api/ravisabha/<ravisabha_id>", methods=["DELETE"], endpoint="api_ravisabha_delete")
    @json_api
    def api_ravisabha_delete(ravisabha_id: str):
        container.ravisabha_service.delete(ravisabha_id)
        return jsonify({"message": "Ravisabha deleted successfully"}), 200
