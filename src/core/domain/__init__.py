"""Modelos, estados y sesión del wizard.

Por qué:
- Aquí viven las estructuras de datos puras y estrictas (Pydantic v2).
- El dominio no conoce HTTP, CLI, ni prompts: solo conceptos del despliegue.
"""
