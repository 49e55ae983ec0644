from django.apps import AppConfig


class ExchangeConfig(AppConfig):
    name = "apps.exchange"
    label = "exchange"
    verbose_name = "Exchange rates"

    engine = None

    def ready(self):
        from apps.exchange.application.engine import build_conversion_engine

        self.engine = build_conversion_engine()
