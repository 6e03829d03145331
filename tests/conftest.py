import pytest
from faker import Faker

from letter_layout.config import LayoutConfig
from letter_layout.content import AddressBlock, LetterContent, TableRow
from letter_layout.fonts import FontMetrics
from letter_layout.layout_engine import PageManager
from letter_layout.paragraphs import PlainParagraph
from letter_layout.sample import SampleLetterGenerator


@pytest.fixture
def fonts():
    return FontMetrics().init_fonts()


@pytest.fixture
def config():
    return LayoutConfig()


@pytest.fixture
def pm(fonts, config):
    return PageManager(fonts, config)


@pytest.fixture
def fake():
    fake = Faker("en_GB")
    fake.seed_instance(1234)
    return fake


@pytest.fixture
def sample_generator():
    return SampleLetterGenerator(seed=7)


def make_letter(**overrides) -> LetterContent:
    """Minimal letter: short address blocks, one paragraph, no annexes."""
    fields = dict(
        sender=AddressBlock(name="Acme Supplies Ltd", lines=("1 High Street", "Leeds", "LS1 1AA")),
        recipient=AddressBlock(
            name="Widget Traders Ltd",
            lines=("22 Mill Lane", "York", "YO1 7HH"),
        ),
        date="3 March 2025",
        reference="Re: Invoice INV-1001",
        salutation="Dear Sirs,",
        body_paragraphs=(PlainParagraph("Payment of the invoice below is now overdue."),),
        table=(
            TableRow("Invoice Number:", "INV-1001"),
            TableRow("Total Outstanding:", "£1,234.56", bold=True),
        ),
        closing="Yours faithfully,",
        signer_name="Jane Smith",
        signer_title="Director",
    )
    fields.update(overrides)
    return LetterContent(**fields)


@pytest.fixture
def letter():
    return make_letter()
