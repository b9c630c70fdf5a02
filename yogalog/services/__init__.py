"""Services — impure shell: transactions over AsyncSession around the pure core."""
