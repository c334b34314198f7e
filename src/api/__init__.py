"""API: camada de borda e adapters de canais.

Responsabilidades:
- Receber requests de canais externos (Flows)
- Validar assinaturas e payloads
- Construir payloads para APIs externas
- Aplicar o contrato de templates antes do envio

Subpastas:
- connectors/: modelos e parser de templates por canal
- payload_builders/: construção de payloads para APIs externas
- validators/: validação de contatos, telefones e templates
- routes/: endpoints HTTP (Flows, health)

NÃO PODE conter: regras de tela do Flow ou orquestração.
"""
