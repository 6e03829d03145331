"""Immutable letter content model and loading from plain data."""

import json
from dataclasses import dataclass
from enum import Enum
from pathlib import Path
from typing import Any, Dict, List, Optional, Tuple, Union
import yaml

from .body_text import parse_body_text
from .errors import ContentError
from .paragraphs import BulletList, HeadingParagraph, Paragraph, PlainParagraph


class LetterType(Enum):
    """Kinds of correspondence the engine lays out."""
    LBA = "lba"  # Letter before action
    POLITE_CHASER = "polite_chaser"
    INSTALMENT_AGREEMENT = "instalment_agreement"
    PART_36_OFFER = "part_36_offer"
    OTHER = "other"


@dataclass(frozen=True)
class AddressBlock:
    name: str
    contact_name: Optional[str] = None
    lines: Tuple[str, ...] = ()


@dataclass(frozen=True)
class TableRow:
    label: str
    value: str
    bold: bool = False


@dataclass(frozen=True)
class HelpOrganization:
    name: str
    phone: Optional[str] = None
    website: Optional[str] = None
    description: Optional[str] = None


@dataclass(frozen=True)
class InfoSheetContent:
    """Information sheet annex: warning, free advice directory, notes."""
    title: str
    warning_text: str
    help_organizations: Tuple[HelpOrganization, ...] = ()
    additional_info: Tuple[str, ...] = ()
    response_days: int = 30


@dataclass(frozen=True)
class ReplyFormOption:
    label: str
    has_checkbox: bool = False
    sub_options: Tuple[str, ...] = ()


@dataclass(frozen=True)
class ReplyFormSection:
    title: str
    instructions: Optional[str] = None
    options: Tuple[ReplyFormOption, ...] = ()
    has_signature_line: bool = False
    has_date_line: bool = False


@dataclass(frozen=True)
class ReplyFormContent:
    """Reply form annex returned by the recipient."""
    title: str
    claimant_name: str
    debtor_name: str
    claim_amount: str
    invoice_ref: str
    sections: Tuple[ReplyFormSection, ...] = ()


@dataclass(frozen=True)
class LetterContent:
    """Everything needed to lay out one letter and its annexes."""
    sender: AddressBlock
    recipient: AddressBlock
    date: str
    reference: str
    salutation: str
    closing: str
    signer_name: str
    body_paragraphs: Tuple[Paragraph, ...] = ()
    table: Tuple[TableRow, ...] = ()
    signer_title: Optional[str] = None
    signature_image: Optional[str] = None  # base64 PNG/JPEG, data URL allowed
    enclosures: Tuple[str, ...] = ()

    document_type: LetterType = LetterType.OTHER
    invoice_number: Optional[str] = None

    include_info_sheet: bool = False
    include_reply_form: bool = False
    info_sheet: Optional[InfoSheetContent] = None
    reply_form: Optional[ReplyFormContent] = None


# ============================================================================
# LOADING FROM DICTS / FILES
# ============================================================================

def _require(data: Dict[str, Any], key: str, where: str) -> Any:
    if key not in data or data[key] is None:
        raise ContentError(f"{where}: missing required field '{key}'")
    return data[key]


def _as_mapping(data: Any, where: str) -> Dict[str, Any]:
    if not isinstance(data, dict):
        raise ContentError(f"{where}: expected a mapping, got {type(data).__name__}")
    return data


def _strings(values: Optional[List[Any]]) -> Tuple[str, ...]:
    return tuple(str(v) for v in (values or []))


def address_from_dict(data: Dict[str, Any], where: str = "address") -> AddressBlock:
    data = _as_mapping(data, where)
    return AddressBlock(
        name=str(_require(data, "name", where)),
        contact_name=data.get("contact_name"),
        lines=_strings(data.get("lines")),
    )


def paragraph_from_dict(data: Union[str, Dict[str, Any]], where: str = "paragraph") -> Paragraph:
    """
    Build a paragraph from a dict.

    Accepts the tagged form {"kind": "plain" | "heading" | "bullets", ...}
    and the flag form {"is_heading": ..., "is_bullet_list": ...}. A bare
    string is a plain paragraph.
    """
    if isinstance(data, str):
        return PlainParagraph(text=data)
    data = _as_mapping(data, where)

    kind = data.get("kind")
    if kind is None:
        is_heading = bool(data.get("is_heading"))
        is_bullets = bool(data.get("is_bullet_list"))
        if is_heading and is_bullets:
            raise ContentError(f"{where}: cannot be both a heading and a bullet list")
        kind = "heading" if is_heading else "bullets" if is_bullets else "plain"

    if kind == "plain":
        return PlainParagraph(text=str(data.get("text", "")), bold=bool(data.get("bold", False)))
    if kind == "heading":
        level = int(data.get("level", data.get("heading_level", 2)))
        if level not in (1, 2, 3):
            raise ContentError(f"{where}: heading level must be 1, 2 or 3, got {level}")
        return HeadingParagraph(text=str(_require(data, "text", where)), level=level)
    if kind == "bullets":
        return BulletList(items=_strings(data.get("items", data.get("bullet_items"))))

    raise ContentError(f"{where}: unknown paragraph kind {kind!r}")


def table_row_from_dict(data: Dict[str, Any], where: str = "table row") -> TableRow:
    data = _as_mapping(data, where)
    return TableRow(
        label=str(_require(data, "label", where)),
        value=str(_require(data, "value", where)),
        bold=bool(data.get("bold", False)),
    )


def info_sheet_from_dict(data: Dict[str, Any]) -> InfoSheetContent:
    where = "info_sheet"
    data = _as_mapping(data, where)
    organizations = []
    for i, org in enumerate(data.get("help_organizations") or []):
        org = _as_mapping(org, f"{where}.help_organizations[{i}]")
        organizations.append(HelpOrganization(
            name=str(_require(org, "name", f"{where}.help_organizations[{i}]")),
            phone=org.get("phone"),
            website=org.get("website"),
            description=org.get("description"),
        ))
    return InfoSheetContent(
        title=str(_require(data, "title", where)),
        warning_text=str(_require(data, "warning_text", where)),
        help_organizations=tuple(organizations),
        additional_info=_strings(data.get("additional_info")),
        response_days=int(data.get("response_days", 30)),
    )


def reply_form_from_dict(data: Dict[str, Any]) -> ReplyFormContent:
    where = "reply_form"
    data = _as_mapping(data, where)
    sections = []
    for i, section in enumerate(data.get("sections") or []):
        section_where = f"{where}.sections[{i}]"
        section = _as_mapping(section, section_where)
        options = []
        for j, option in enumerate(section.get("options") or []):
            option = _as_mapping(option, f"{section_where}.options[{j}]")
            options.append(ReplyFormOption(
                label=str(_require(option, "label", f"{section_where}.options[{j}]")),
                has_checkbox=bool(option.get("has_checkbox", False)),
                sub_options=_strings(option.get("sub_options")),
            ))
        sections.append(ReplyFormSection(
            title=str(_require(section, "title", section_where)),
            instructions=section.get("instructions"),
            options=tuple(options),
            has_signature_line=bool(section.get("has_signature_line", False)),
            has_date_line=bool(section.get("has_date_line", False)),
        ))
    return ReplyFormContent(
        title=str(_require(data, "title", where)),
        claimant_name=str(_require(data, "claimant_name", where)),
        debtor_name=str(_require(data, "debtor_name", where)),
        claim_amount=str(_require(data, "claim_amount", where)),
        invoice_ref=str(data.get("invoice_ref") or ""),
        sections=tuple(sections),
    )


def letter_content_from_dict(data: Dict[str, Any]) -> LetterContent:
    """Build LetterContent from parsed JSON/YAML data (snake_case keys)."""
    where = "letter"
    data = _as_mapping(data, where)

    document_type = data.get("document_type", LetterType.OTHER.value)
    try:
        document_type = LetterType(document_type)
    except ValueError:
        raise ContentError(f"{where}: unknown document_type {document_type!r}")

    if data.get("body_paragraphs"):
        paragraphs = tuple(
            paragraph_from_dict(p, f"{where}.body_paragraphs[{i}]")
            for i, p in enumerate(data["body_paragraphs"])
        )
    else:
        # Drafted text instead of structured paragraphs
        paragraphs = parse_body_text(str(data.get("body_text") or ""))
    table = tuple(
        table_row_from_dict(r, f"{where}.table[{i}]")
        for i, r in enumerate(data.get("table") or [])
    )

    info_sheet = data.get("info_sheet")
    reply_form = data.get("reply_form")

    return LetterContent(
        sender=address_from_dict(_require(data, "sender", where), "sender"),
        recipient=address_from_dict(_require(data, "recipient", where), "recipient"),
        date=str(_require(data, "date", where)),
        reference=str(data.get("reference", "")),
        salutation=str(_require(data, "salutation", where)),
        closing=str(_require(data, "closing", where)),
        signer_name=str(_require(data, "signer_name", where)),
        body_paragraphs=paragraphs,
        table=table,
        signer_title=data.get("signer_title"),
        signature_image=data.get("signature_image"),
        enclosures=_strings(data.get("enclosures")),
        document_type=document_type,
        invoice_number=data.get("invoice_number"),
        include_info_sheet=bool(data.get("include_info_sheet", False)),
        include_reply_form=bool(data.get("include_reply_form", False)),
        info_sheet=info_sheet_from_dict(info_sheet) if info_sheet is not None else None,
        reply_form=reply_form_from_dict(reply_form) if reply_form is not None else None,
    )


def load_letter_content(path: Path) -> LetterContent:
    """Load letter content from a .json, .yaml or .yml file."""
    path = Path(path)
    with open(path, "r", encoding="utf-8") as f:
        if path.suffix.lower() == ".json":
            data = json.load(f)
        else:
            data = yaml.safe_load(f)
    return letter_content_from_dict(data)
