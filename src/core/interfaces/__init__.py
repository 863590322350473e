"""Interfaces/abstracciones del Core.

Por qué:
- Define contratos (Protocol) que cumplen los objetos del cliente HTTP.
- Permite invertir dependencias: el Core depende de abstracciones.
"""
