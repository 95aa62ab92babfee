"""Example: list payroll through the service layer (no Flask)."""

import importlib

from config import get_settings_module

from src.workforce_system.workforce_system.container import build_container


def main():
    settings = importlib.import_module(get_settings_module())
    container = build_container(db_config=settings.DB_CONFIG)

    session = container.access_gate.authenticate("admin@example.com", "admin123", "admin")
    for record in container.payroll_service.list_records(session.token):
        print(record.emp_id, f"{record.month:02d}/{record.year}", record.net_salary, record.status.value)
    container.access_gate.invalidate(session.token)


if __name__ == "__main__":
    main()
