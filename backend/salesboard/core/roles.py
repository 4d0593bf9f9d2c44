# salesboard/core/roles.py

import enum


class ProfileRole(str, enum.Enum):
    ADMIN = "ADMIN"  # manages users and the service catalogue
    USER = "USER"    # salesperson


class CustomerType(str, enum.Enum):
    NEW = "NEW"
    REPEAT = "REPEAT"
