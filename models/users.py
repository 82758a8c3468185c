from utils.db import mongo
from utils import clock
from utils.errors import ValidationError


class User:

    ROLES = ("employee", "admin")

    @staticmethod
    def collection():
        return mongo.db.users

    def __init__(self, name, employee_id, email, face_data=None, role="employee",
                 created_at=None, last_login=None):
        if not name or not employee_id or not email:
            raise ValidationError("name, employeeId and email are required")
        if role not in User.ROLES:
            raise ValidationError(f"Invalid role: {role}")

        self.name = name
        self.employee_id = employee_id
        self.email = email

        # Base64 encoded face image from the capture screen
        self.face_data = face_data

        self.role = role
        self.created_at = created_at or clock.utcnow()
        self.last_login = last_login

    # Convert to dictionary for MongoDB
    def to_dict(self):
        doc = {
            "name": self.name,
            "employeeId": self.employee_id,
            "email": self.email,
            "role": self.role,
            "createdAt": self.created_at,
        }
        # unset fields stay out of the document, like an unset lastLogin
        if self.face_data is not None:
            doc["faceData"] = self.face_data
        if self.last_login is not None:
            doc["lastLogin"] = self.last_login
        return doc

    def public_dict(self):
        return {"name": self.name, "employeeId": self.employee_id, "email": self.email}

    # Save new user
    def save(self):
        doc = self.to_dict()
        self.collection().insert_one(doc)
        return doc

    # Find user by employee ID
    @staticmethod
    def find_by_employee_id(employee_id):
        return User.collection().find_one({"employeeId": employee_id})

    # Either key already taken?
    @staticmethod
    def find_existing(employee_id, email):
        return User.collection().find_one({"$or": [{"employeeId": employee_id}, {"email": email}]})

    # All users without the (large) face image
    @staticmethod
    def list_without_face_data():
        return list(User.collection().find({}, {"faceData": 0}))

    @staticmethod
    def count():
        return User.collection().count_documents({})

    # First n users in natural order (recognition candidates)
    @staticmethod
    def first(n):
        return list(User.collection().find({}, {"name": 1, "employeeId": 1}).limit(n))

    @staticmethod
    def update_last_login(employee_id, when=None):
        return User.collection().update_one(
            {"employeeId": employee_id},
            {"$set": {"lastLogin": when or clock.utcnow()}}
        )
