"""Interfaces/abstracciones del Core.

Por qué:
- Define contratos (Protocol) que implementan la CLI y los adaptadores.
- Permite invertir dependencias: los servicios dependen de abstracciones
  (prompts, portapapeles, reloj) y se testean sin terminal ni red.
"""
