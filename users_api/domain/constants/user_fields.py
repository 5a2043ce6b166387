"""Constants for User model field names"""


class UserFields:
    """Field name constants for User model"""
    NAME = "name"
    AGE = "age"
    EMAIL = "email"
    PASSWORD = "password"
    ADDRESS = "address"

    # MongoDB specific
    MONGO_ID = "_id"  # MongoDB's internal _id field
