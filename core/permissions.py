# ============================================
# CENTRALIZED ROLE → PERMISSIONS MAP
# ============================================
ROLE_PERMISSIONS = {

    # =====================================================
    # ADMIN: full access to everything
    # =====================================================
    "ADMIN": ["*"],

    # =====================================================
    # COORDINATOR: reviews move-outs and runs inspections
    # for the houses they are assigned to
    # =====================================================
    "COORDINATOR": [
        "houses:read",
        "rooms:read",
        "tenancies:read",
        "move_out:read", "move_out:review",
        "inspections:read", "inspections:write",
    ],

    # =====================================================
    # TENANT: acts only on their own tenancy
    # =====================================================
    "TENANT": [
        "tenancies:read_own",
        "move_out:submit",
        "move_in:sign",
        "uploads:write",
    ],
}
