"""
Certificate PDF layout.
"""
from typing import List

from apps.documents.pdf import (
    Block,
    Spacer,
    Text,
    always,
    build_blocks,
    format_date,
    render_pdf,
    signature_blocks,
)
from .services import CertificateView


def title(view: CertificateView) -> List[Block]:
    return [
        Text('MEDICAL CERTIFICATE', size=20, align='center'),
        Spacer(1, size=20),
        Text('This is to certify that:', size=14, align='center'),
        Spacer(2, size=14),
        Text(f"Name: {view.patient.full_name}", size=12),
        Text(f"Age: {view.patient.age} | Sex: {view.patient.sex}", size=12),
        Spacer(1, size=12),
    ]


def diagnosis(view: CertificateView) -> List[Block]:
    return [Text(f"Diagnosis: {view.diagnosis}", size=12)]


def content(view: CertificateView) -> List[Block]:
    return [Spacer(1, size=12), Text(view.content, size=12)]


def recommendations(view: CertificateView) -> List[Block]:
    return [Spacer(1, size=12), Text(f"Recommendations: {view.recommendations}", size=12)]


def restrictions(view: CertificateView) -> List[Block]:
    return [Spacer(1, size=12), Text(f"Restrictions: {view.restrictions}", size=12)]


def valid_until(view: CertificateView) -> List[Block]:
    return [Spacer(1, size=12), Text(f"Valid Until: {format_date(view.valid_until)}", size=12)]


def issue_date(view: CertificateView) -> List[Block]:
    return [Text(f"Issue Date: {format_date(view.issue_date)}", size=12)]


def signature(view: CertificateView) -> List[Block]:
    doctor = view.doctor
    blocks = signature_blocks(
        doctor.full_name,
        doctor.qualification,
        doctor.registration_number,
        signature_path=doctor.digital_signature_path,
        stamp_path=doctor.stamp_image_path,
    )
    blocks.append(Text(doctor.clinic_name or ''))
    blocks.append(Text(doctor.clinic_address or ''))
    return blocks


CERTIFICATE_SECTIONS = (
    (always, title),
    (lambda view: bool(view.diagnosis), diagnosis),
    (lambda view: bool(view.content), content),
    (lambda view: bool(view.recommendations), recommendations),
    (lambda view: bool(view.restrictions), restrictions),
    (lambda view: view.valid_until is not None, valid_until),
    (always, issue_date),
    (always, signature),
)


def certificate_blocks(view: CertificateView) -> List[Block]:
    return build_blocks(view, CERTIFICATE_SECTIONS)


def certificate_filename(view: CertificateView) -> str:
    return f"certificate-{view.certificate_id}.pdf"


def render_certificate_pdf(view: CertificateView) -> bytes:
    """
    Raises:
        RenderError: the PDF engine failed
    """
    return render_pdf(
        'certificate',
        certificate_blocks(view),
        title=f"Certificate {view.certificate_id}",
    )
