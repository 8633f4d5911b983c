from __future__ import annotations


class DomainError(Exception):
    """Base para erros de dominio."""


class ConfigurationError(DomainError):
    """Configuracao obrigatoria ausente ou invalida."""


class BillingError(DomainError):
    """Falha no fluxo de pagamento."""


class CheckoutInputError(BillingError):
    """Parametros invalidos para criar a sessao de checkout."""


class TourNotFoundError(BillingError):
    """Tour solicitado nao existe no catalogo."""


class PaymentProviderError(BillingError):
    """Provedor de pagamento falhou ou nao respondeu a tempo."""


class WebhookSignatureError(BillingError):
    """Assinatura do webhook invalida."""


class WebhookPayloadError(BillingError):
    """Payload do webhook nao pode ser interpretado."""


class BookingStoreError(DomainError):
    """Falha ao gravar ou consultar reservas."""


class NotificationError(DomainError):
    """Falha ao enviar notificacao."""


class BookingPendingError(DomainError):
    """Pagamento chegou antes da reserva da sessao de checkout ser gravada."""
