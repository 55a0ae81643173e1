"""Services Layer — UserService business rules and the per-operation controllers."""
