"""
Users and employees database configuration.

Users and Employees have no registered structural contract yet, so the
manifest only asks the warmup to open the connection.
"""

DB_NAME = "UsersEmployeesDB"


# Manifest for startup warmup
DB_MANIFEST = {
    "db_name": DB_NAME,
    "purpose": "User accounts and employee directory",
    "collections": [],
}
