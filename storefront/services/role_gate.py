# storefront/services/role_gate.py
from storefront.services.session_context import SessionContext


class RoleGate:
    """Role checks for dashboards, order status updates and catalog management."""

    ADMIN = "admin"

    @classmethod
    def authorize(cls, ctx: SessionContext, required_role: str) -> bool:
        user = ctx.current_user
        if user is None:
            return False
        #admin passes every role check
        return user.role == required_role or user.role == cls.ADMIN
