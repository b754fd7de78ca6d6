# Middleware package init
"""
PC Builder Catalog API — Middleware Package
============================================

Middleware Chain (order matters!):
    Request → [Request ID] → [Logging] → [GZip] → [CORS] → Route Handler

    1. Request ID first, so every later log line and error body can use it
    2. Logging measures the full handler time and sees the final status
    3. CORS is FastAPI's CORSMiddleware (open to all origins by default)
"""
