"""App: coração do sistema: orquestração e infraestrutura.

Subpastas:
- bootstrap/: composition root (inicialização, wiring)
- coordinators/: fluxos end-to-end (ações de Flow → próxima tela)
- services/: serviços de aplicação
- infra/: implementações concretas de IO (crypto, secrets)
- protocols/: contratos/interfaces
- observability/: correlation_id e middleware
- constants/: constantes da aplicação

Padrão: app executa; api adapta; utils apoia.
"""
