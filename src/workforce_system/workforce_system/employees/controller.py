from __future__ import annotations

from flask import Flask, jsonify

from ..common.datetime_utils import iso_or_none
from ..common.web import bearer_token, json_body
from ..container import Container
from .model import Employee


def employee_json(emp: Employee) -> dict:
    return {
        "emp_id": emp.emp_id,
        "first_name": emp.first_name,
        "last_name": emp.last_name,
        "email": emp.email,
        "mobile_no": emp.mobile_no,
        "dob": iso_or_none(emp.dob),
        "role_id": emp.role_id,
        "role_name": emp.role_name,
        "salary": str(emp.salary) if emp.salary is not None else None,
        "date_of_joining": iso_or_none(emp.date_of_joining),
        "profile_photo": emp.profile_photo,
    }


def register(app: Flask, container: Container) -> None:
    service = container.employee_service

    @app.route("/admin/employees", methods=["GET"], endpoint="list_employees")
    def list_employees():
        return jsonify([employee_json(e) for e in service.list_employees(bearer_token())])

    @app.route("/admin/employees", methods=["POST"], endpoint="create_employee")
    def create_employee():
        data = json_body()
        emp = service.create_employee(
            bearer_token(),
            emp_id=data.get("emp_id", ""),
            first_name=data.get("first_name", ""),
            last_name=data.get("last_name", ""),
            email=data.get("email", ""),
            password=data.get("password"),
            mobile_no=data.get("mobile_no"),
            dob=data.get("dob"),
            role_id=data.get("role_id"),
            salary=data.get("salary"),
            date_of_joining=data.get("date_of_joining"),
            profile_photo=data.get("profile_photo"),
        )
        return jsonify(employee_json(emp)), 201

    @app.route("/admin/employees/<emp_id>", methods=["GET"], endpoint="get_employee")
    def get_employee(emp_id: str):
        return jsonify(employee_json(service.get_employee(bearer_token(), emp_id)))

    @app.route("/admin/employees/<emp_id>", methods=["PUT"], endpoint="update_employee")
    def update_employee(emp_id: str):
        return jsonify(employee_json(service.update_employee(bearer_token(), emp_id, json_body())))

    @app.route("/admin/employees/<emp_id>", methods=["DELETE"], endpoint="delete_employee")
    def delete_employee(emp_id: str):
        service.delete_employee(bearer_token(), emp_id)
        return jsonify({"message": "Employee deleted"})

    @app.route("/employee/profile", methods=["GET"], endpoint="own_profile")
    def own_profile():
        return jsonify(employee_json(service.get_own_profile(bearer_token())))

    @app.route("/employee/profile/photo", methods=["PUT"], endpoint="own_photo")
    def own_photo():
        data = json_body()
        return jsonify(employee_json(service.update_own_photo(bearer_token(), data.get("profile_photo"))))
