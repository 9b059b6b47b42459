from .memory import Memory, effective_address
