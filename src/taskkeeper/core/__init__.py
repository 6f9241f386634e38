"""
Core wiring shared by the CLI shell.

Components:
- ports.py: Protocols the shell depends on (TaskRepo, Console)
- state.py: AppState, the explicit per-process object passed to every handler
"""
