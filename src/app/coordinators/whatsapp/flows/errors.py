"""Erros de negócio do roteador de Flows.

Nenhum destes chega ao transporte como falha HTTP: a borda converte em
response de erro criptografada.
"""


class FlowRequestError(ValueError):
    """Payload descriptografado não descreve uma ação de Flow válida."""


class FlowScreenDataError(ValueError):
    """Dados recebidos não satisfazem o contrato da tela."""

    def __init__(self, screen: str, missing: tuple[str, ...]) -> None:
        self.screen = screen
        self.missing = missing
        super().__init__(f"Campos obrigatórios ausentes em {screen}: {', '.join(missing)}")
