"""Sample letter content generated with Faker, for demos and tests."""

import base64
from datetime import date
from io import BytesIO
from typing import List, Optional

from faker import Faker
from PIL import Image, ImageDraw

from .content import (
    AddressBlock, HelpOrganization, InfoSheetContent, LetterContent, LetterType,
    ReplyFormContent, ReplyFormOption, ReplyFormSection, TableRow,
)
from .paragraphs import BulletList, HeadingParagraph, Paragraph, PlainParagraph


CURRENCY_SYMBOLS = {"GBP": "£", "EUR": "€", "USD": "$"}

# Free debt advice organisations listed on the information sheet
HELP_ORGANIZATIONS = (
    HelpOrganization(
        name="Citizens Advice",
        phone="0800 144 8848",
        website="www.citizensadvice.org.uk",
        description="Free, confidential advice on debt and other issues",
    ),
    HelpOrganization(
        name="StepChange Debt Charity",
        phone="0800 138 1111",
        website="www.stepchange.org",
        description="Free debt advice and solutions",
    ),
    HelpOrganization(
        name="National Debtline",
        phone="0808 808 4000",
        website="www.nationaldebtline.org",
        description="Free, independent debt advice",
    ),
    HelpOrganization(
        name="Money Helper",
        phone="0800 138 7777",
        website="www.moneyhelper.org.uk",
        description="Free, impartial money guidance",
    ),
)


def format_currency(amount: float, currency: str = "GBP") -> str:
    """£1,234.56 style amount."""
    symbol = CURRENCY_SYMBOLS.get(currency, "$")
    return f"{symbol}{amount:,.2f}"


def format_letter_date(value: date) -> str:
    """UK letter date, e.g. 3 March 2025."""
    return f"{value.day} {value.strftime('%B %Y')}"


def standard_info_sheet(response_days: int = 30) -> InfoSheetContent:
    return InfoSheetContent(
        title="INFORMATION SHEET",
        warning_text=(
            f"DO NOT IGNORE THIS LETTER. If you do not respond within {response_days} days, "
            "court action may be taken against you."
        ),
        help_organizations=HELP_ORGANIZATIONS,
        additional_info=(
            "If you are struggling with debt, free help is available.",
            "You should seek advice as soon as possible.",
            "Ignoring this letter will not make the debt go away.",
            f"If you dispute this debt, you must respond in writing within {response_days} "
            "days explaining why.",
        ),
        response_days=response_days,
    )


def standard_reply_form(
    claimant_name: str,
    debtor_name: str,
    claim_amount: str,
    invoice_ref: str,
) -> ReplyFormContent:
    return ReplyFormContent(
        title="REPLY FORM",
        claimant_name=claimant_name,
        debtor_name=debtor_name,
        claim_amount=claim_amount,
        invoice_ref=invoice_ref,
        sections=(
            ReplyFormSection(
                title="SECTION 1: YOUR RESPONSE",
                instructions="Please tick ONE of the following options:",
                options=(
                    ReplyFormOption(
                        "I accept that I owe the full amount claimed and will pay within 30 days",
                        has_checkbox=True,
                    ),
                    ReplyFormOption(
                        "I accept that I owe the debt but cannot pay in full. I propose to pay "
                        "by instalments (complete Section 2)",
                        has_checkbox=True,
                    ),
                    ReplyFormOption(
                        "I dispute this debt (please provide full details in Section 3)",
                        has_checkbox=True,
                        sub_options=(
                            "I do not owe any of the amount claimed",
                            "I owe part of the amount claimed",
                        ),
                    ),
                ),
            ),
            ReplyFormSection(
                title="SECTION 2: PAYMENT PROPOSAL (if applicable)",
                instructions="If you cannot pay in full, please propose a payment plan:",
                options=(
                    ReplyFormOption("I propose to pay £_______ per month"),
                    ReplyFormOption("I can make a lump sum payment of £_______ immediately"),
                ),
            ),
            ReplyFormSection(
                title="SECTION 3: DISPUTE (if applicable)",
                instructions="If you dispute this debt, please explain why:",
            ),
            ReplyFormSection(
                title="SECTION 4: DOCUMENTS",
                instructions="Please tick if you require copies of the following:",
                options=(
                    ReplyFormOption("Copy of the original invoice", has_checkbox=True),
                    ReplyFormOption("Copy of the contract/agreement", has_checkbox=True),
                    ReplyFormOption("Statement of account", has_checkbox=True),
                ),
            ),
            ReplyFormSection(
                title="DECLARATION",
                has_signature_line=True,
                has_date_line=True,
            ),
        ),
    )


def signature_png_base64(width: int = 300, height: int = 80) -> str:
    """A scribbled signature as a base64 PNG data URL."""
    image = Image.new("RGB", (width, height), "white")
    draw = ImageDraw.Draw(image)
    points = [
        (10, 55), (40, 20), (60, 60), (90, 25), (115, 58),
        (150, 30), (175, 50), (210, 22), (240, 55), (290, 35),
    ]
    draw.line(points, fill="black", width=3)

    buffer = BytesIO()
    image.save(buffer, format="PNG")
    return "data:image/png;base64," + base64.b64encode(buffer.getvalue()).decode("ascii")


class SampleLetterGenerator:
    """Builds plausible letters before action with Faker."""

    def __init__(self, fake: Optional[Faker] = None, seed: Optional[int] = None):
        self.fake = fake or Faker("en_GB")
        if seed is not None:
            self.fake.seed_instance(seed)

    def address(self, with_contact: bool = True) -> AddressBlock:
        return AddressBlock(
            name=self.fake.company(),
            contact_name=self.fake.name() if with_contact else None,
            lines=(self.fake.street_address(), self.fake.city(), self.fake.postcode()),
        )

    def words(self, count: int) -> str:
        return " ".join(self.fake.words(nb=count))

    def body(self, paragraphs: int = 3) -> List[Paragraph]:
        body: List[Paragraph] = [
            PlainParagraph(self.fake.paragraph(nb_sentences=5)),
            HeadingParagraph("Amount outstanding", level=2),
            PlainParagraph(self.fake.paragraph(nb_sentences=3), bold=True),
            BulletList(items=tuple(self.fake.sentence(nb_words=10) for _ in range(3))),
        ]
        for _ in range(max(paragraphs - 2, 0)):
            body.append(PlainParagraph(self.fake.paragraph(nb_sentences=6)))
        return body

    def letter_before_action(
        self,
        paragraphs: int = 3,
        with_signature: bool = True,
        with_annexes: bool = True,
    ) -> LetterContent:
        sender = self.address(with_contact=False)
        recipient = self.address()
        invoice_number = f"INV-{self.fake.random_int(10000, 99999)}"

        principal = self.fake.random_int(50000, 2500000) / 100
        interest = round(principal * 0.08 * 90 / 365, 2)
        compensation = 70.0 if principal < 1000 else 100.0 if principal < 10000 else 150.0
        total = principal + interest + compensation

        table = (
            TableRow("Invoice Number:", invoice_number),
            TableRow("Invoice Date:", format_letter_date(self.fake.date_this_year())),
            TableRow("Principal Amount:", format_currency(principal)),
            TableRow("Interest:", format_currency(interest)),
            TableRow("Late Payment Compensation:", format_currency(compensation)),
            TableRow("Total Outstanding:", format_currency(total), bold=True),
        )

        signer_name = self.fake.name()
        return LetterContent(
            document_type=LetterType.LBA,
            invoice_number=invoice_number,
            sender=sender,
            recipient=recipient,
            date=format_letter_date(self.fake.date_this_year()),
            reference=(
                "RE: PRE-ACTION PROTOCOL FOR DEBT CLAIMS - OUTSTANDING DEBT OF "
                f"{format_currency(total)}"
            ),
            salutation=f"Dear {recipient.contact_name},",
            body_paragraphs=tuple(self.body(paragraphs)),
            table=table,
            closing="Yours faithfully,",
            signature_image=signature_png_base64() if with_signature else None,
            signer_name=signer_name,
            signer_title="Director",
            enclosures=(
                "Annex 1: Information Sheet on Debt and Mental Health",
                "Annex 2: Financial Statement (Reply Form)",
            ) if with_annexes else (),
            include_info_sheet=with_annexes,
            include_reply_form=with_annexes,
            info_sheet=standard_info_sheet() if with_annexes else None,
            reply_form=standard_reply_form(
                sender.name, recipient.name, format_currency(total), invoice_number,
            ) if with_annexes else None,
        )
