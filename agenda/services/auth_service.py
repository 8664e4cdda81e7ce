from agenda.models.user import User, Role

# Landing section of each role once logged in
ROLE_HOME = {
    Role.ADMIN: 'management',
    Role.TEACHER: 'news',
    Role.TUTOR: 'news',
}

def home_view_for(role):
    """Resolve the landing section for a role; every Role has one."""
    if not isinstance(role, Role):
        try:
            role = Role(role)
        except ValueError:
            raise ValueError(f"Unknown role: {role}")
    return ROLE_HOME[role]


class AuthService:

    @staticmethod
    def authenticate(email, password):
        """First user whose email and password match, None otherwise"""
        if not email or not password:
            return None
        user = User.query.filter_by(email=email.strip()).first()
        if user is None or not user.check_password(password):
            return None
        return user
