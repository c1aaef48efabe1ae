"""
Response envelope package.

Every mounted route answers with the same JSON shape:
``{"errorCode": ..., "message": ..., "data": ...}``.
Handlers fill a per-request context; the envelope stages turn it
(or a raised error) into exactly one response.
"""
