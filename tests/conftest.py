"""Shared fixtures for the ticket_report test suite."""

import pytest

from builders import make_report_input, mock_loader, serve_images
from ticket_report.clients.image_loader import ImageLoader
from ticket_report.services.report_input import ReportInput
from ticket_report.services.theme import BrandingConfig


@pytest.fixture
def report_input() -> ReportInput:
    return make_report_input()


@pytest.fixture
def branding() -> BrandingConfig:
    return BrandingConfig(
        name="FDG PRONTA RESPOSTA",
        cnpj="59.355.128/0001-10",
        address="R. Dona Francisca, 801 - Joinville - SC",
        phone_commercial="(47) 99135-6830",
        phone_monitoring="(47) 99160-7491",
        email="contato@fdgprontaresposta.com.br",
        website="www.fdgprontaresposta.com.br",
    )


@pytest.fixture
def loader() -> ImageLoader:
    return mock_loader(serve_images())
