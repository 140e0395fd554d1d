"""ViewModel package for UI state and command surfaces.

Call context:
    ``rocketviz/web_ui/runtime.py`` composes the concrete viewmodels and the
    NiceGUI page binds widget callbacks to them.

Dependencies:
    Modules in this package depend on domain types only. I/O adapters and
    use-case orchestration remain outside.

Responsibilities:
    - Expose mutable UI state (viewport, controls, selection gesture).
    - Derive render inputs (grid lines, point colours) from domain geometry.
"""
