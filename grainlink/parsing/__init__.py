"""
This package contains the line protocol spoken with the brewing controller.

Sub-packages handle each direction:

- ``commands``: Outgoing command construction and line encoding.
- ``notifications``: Incoming notification line decoding into status records.
"""
