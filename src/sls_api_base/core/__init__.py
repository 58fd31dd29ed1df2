# src/sls_api_base/core/__init__.py
"""
Core do sls-api-base.

Componentes:
    - config → deep-merge, erros tipados e loader de descriptors
    - trace  → configuração injetável da extensão de trace

O core não conhece os literais de nenhum hook; os hooks dependem dele,
nunca o contrário.
"""
