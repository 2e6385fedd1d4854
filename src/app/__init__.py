"""App — núcleo do cálculo de disponibilidade.

Subpastas:
- bootstrap/: composition root (inicialização, wiring de providers)
- domain/: modelos de agenda, equipe e calendários conectados
- services/: cálculo de slots, políticas de equipe e formatação
- infra/: implementações concretas de IO (calendários, stores)
- protocols/: contratos/interfaces
- observability/: correlation_id e métricas via logs estruturados

Padrão: services calculam; infra busca; protocols desacoplam.
"""
