from atom_token.services.tokens import TokenManager, generate_token_id

__all__ = ("TokenManager", "generate_token_id")
