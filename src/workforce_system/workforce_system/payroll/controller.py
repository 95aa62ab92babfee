from __future__ import annotations

from flask import Flask, jsonify, request

from ..common.datetime_utils import iso_or_none
from ..common.web import bearer_token, json_body
from ..container import Container
from .model import PayrollRecord


def payroll_json(record: PayrollRecord) -> dict:
    return {
        "id": record.id,
        "emp_id": record.emp_id,
        "first_name": record.first_name,
        "last_name": record.last_name,
        "month": record.month,
        "year": record.year,
        "base_salary": str(record.base_salary),
        "allowances": str(record.allowances),
        "deductions": str(record.deductions),
        "net_salary": str(record.net_salary),
        "status": record.status.value,
        "payment_date": iso_or_none(record.payment_date),
    }


def register(app: Flask, container: Container) -> None:
    service = container.payroll_service

    @app.route("/admin/payroll", methods=["GET"], endpoint="list_payroll")
    def list_payroll():
        return jsonify([payroll_json(r) for r in service.list_records(bearer_token())])

    @app.route("/admin/payroll", methods=["POST"], endpoint="create_payroll")
    def create_payroll():
        data = json_body()
        record = service.create_record(
            bearer_token(),
            emp_id=data.get("emp_id", ""),
            month=data.get("month"),
            year=data.get("year"),
            base_salary=data.get("base_salary"),
            allowances=data.get("allowances"),
            deductions=data.get("deductions"),
            status=data.get("status"),
            payment_date=data.get("payment_date"),
        )
        return jsonify(payroll_json(record)), 201

    @app.route("/admin/payroll/<int:record_id>", methods=["GET"], endpoint="get_payroll")
    def get_payroll(record_id: int):
        return jsonify(payroll_json(service.get_record(bearer_token(), record_id)))

    @app.route("/admin/payroll/<int:record_id>", methods=["PUT"], endpoint="update_payroll")
    def update_payroll(record_id: int):
        return jsonify(payroll_json(service.update_record(bearer_token(), record_id, json_body())))

    @app.route("/admin/payroll/<int:record_id>", methods=["DELETE"], endpoint="delete_payroll")
    def delete_payroll(record_id: int):
        service.delete_record(bearer_token(), record_id)
        return jsonify({"message": "Payroll record deleted"})

    @app.route("/employee/payroll", methods=["GET"], endpoint="own_payroll")
    def own_payroll():
        records = service.list_for_employee(bearer_token(), request.args.get("emp_id"))
        return jsonify([payroll_json(r) for r in records])
