def seed_document(created_at: str) -> dict:
    """Initial content written the first time the store is initialized."""
    return {
        "requests": [],
        "contacts": [
            {"id": 1, "name": "Ahmed Mechanic", "phone": "0612345678", "email": "ahmed@roadside.com", "role": "mechanic", "createdAt": created_at},
            {"id": 2, "name": "Fatima Towing", "phone": "0623456789", "email": "fatima@roadside.com", "role": "towing", "createdAt": created_at},
            {"id": 3, "name": "Karim Emergency", "phone": "0634567890", "email": "karim@roadside.com", "role": "emergency", "createdAt": created_at},
        ],
        "users": [
            {"id": 1, "username": "admin1", "email": "admin1@roadside.com", "role": "admin", "status": "active", "createdAt": created_at},
            {"id": 2, "username": "superadmin", "email": "super@roadside.com", "role": "super_admin", "status": "active", "createdAt": created_at},
            {"id": 3, "username": "operator1", "email": "op1@roadside.com", "role": "operator", "status": "active", "createdAt": created_at},
        ],
        "admins": [
            {"id": 1, "name": "John Admin", "username": "admin1", "email": "admin1@roadside.com", "phone": "0612345678", "level": "admin", "status": "active", "createdAt": created_at},
            {"id": 2, "name": "Sarah Super", "username": "superadmin", "email": "super@roadside.com", "phone": "0623456789", "level": "super_admin", "status": "active", "createdAt": created_at},
        ],
        "assignments": [],
    }
