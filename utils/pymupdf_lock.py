# utils/pymupdf_lock.py
"""
Lock global para operações PyMuPDF.

IMPORTANTE: PyMuPDF (fitz) NÃO é thread-safe. Os endpoints de relatório
rodam no thread pool do FastAPI, então toda montagem de documento
precisa acontecer dentro deste lock.

Exemplo de uso:
    from utils.pymupdf_lock import pymupdf_lock

    with pymupdf_lock:
        doc = fitz.open()
        # ... operações com doc ...
        pdf_bytes = doc.tobytes()
        doc.close()
"""

import threading

pymupdf_lock = threading.Lock()
