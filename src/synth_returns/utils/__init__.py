"""Shared utilities: validations, parallelism, seeds, logging helpers.

Componentes expostos
--------------------
- `checks` → validação de entradas (NaNs, tamanho mínimo, painéis).
- `parallel` → execução paralela com resultados ordenados.
- `seed` → controle determinístico de geradores.
- `logging_config` → `get_logger` e `log_dict`.
"""
