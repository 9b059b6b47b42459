"""CPU: decoder, word arithmetic, register set and the execute engine."""
