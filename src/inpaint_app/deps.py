"""
Proporciona instancias compartidas que pueden ser inyectadas en los endpoints

Gestiona:
- Forwarder hacia el backend de inferencia (sin estado mutable)

El forwarder se crea una sola vez en create_app con la URL configurada y se
guarda en app.state, de modo que los tests pueden sustituirlo por uno que
apunte a un endpoint simulado.
"""

from fastapi import Request

from inpaint_app.inference import InpaintForwarder


def get_forwarder(request: Request) -> InpaintForwarder:
    return request.app.state.forwarder
