from django.apps import AppConfig


class MarzPayAppConfig(AppConfig):
    name = 'marzpay'
    verbose_name = 'MarzPay Payments'
