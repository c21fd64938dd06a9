# Core package - foundational components
#
# Modules:
# - config: Application settings
# - logging: Structured logging
# - storage: Item store contract and in-memory backend
# - pagination: Cursor-based paging over store snapshots
