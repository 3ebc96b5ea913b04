"""NiceGUI interface - thin visualization layer over the controllers.

Pages:
    - /: Chat with retrieval/agent mode toggle and conversation history
    - /knowledge: Document upload, URL import and deletion
    - /settings: Backend address and status probes

Contains no business logic. Widgets bind to controller attributes and call
controller operations; trigger buttons are disabled while a controller is
submitting or busy.
"""
