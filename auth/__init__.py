from auth.models import Usuario, Role, RoleType
from auth.security import verify_password, get_password_hash, create_access_token
