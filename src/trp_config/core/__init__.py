# src/trp_config/core/__init__.py
"""
Core do TRP Config.

Este pacote reúne a implementação canônica da resolução de configuração,
independente de qualquer módulo consumidor do servidor.

O core é projetado para ser:
    - determinístico
    - testável de forma isolada (filesystem e ambiente injetáveis)
    - tolerante a fontes parciais
    - orientado a precedência explícita

Componentes principais:
    - config → leitura, merge, composição, overrides de ambiente e cache
    - errors → payload canônico de erros para diagnóstico

Limites explícitos:
    - Não contém schemas de módulos específicos
    - Não escreve arquivos
"""
