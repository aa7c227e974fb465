"""
Prescription PDF layout.

PRESCRIPTION_SECTIONS lists, in drawing order, when each part of the
document appears and what it contains.
"""
from typing import List

from django.conf import settings

from apps.documents.pdf import (
    Block,
    Picture,
    Spacer,
    Text,
    always,
    build_blocks,
    format_date,
    render_pdf,
    resolve_image,
    signature_blocks,
)
from apps.prescriptions.records import PrescriptionView

DEFAULT_CLINIC_NAME = 'Medical Clinic'
CONSENT_TEXT = (
    'Consent: The patient was informed about complete treatment and prognosis of the illness.'
)
ADMISSION_TEXT = (
    'In case the complaint aggravates in absence of the doctor, please admit the patient.'
)


def _has_letterhead(view: PrescriptionView) -> bool:
    return resolve_image(view.doctor.letterhead_image_path) is not None


def letterhead(view: PrescriptionView) -> List[Block]:
    return [Picture(resolve_image(view.doctor.letterhead_image_path), x=50, top=45, width=500)]


def text_header(view: PrescriptionView) -> List[Block]:
    doctor = view.doctor
    return [
        Text(settings.PRESCRIPTION_HEADER_TITLE, size=20, align='center'),
        Text(doctor.clinic_name or DEFAULT_CLINIC_NAME, size=12, align='center'),
        Text(doctor.clinic_address or '', size=12, align='center'),
        Text(f"Phone: {doctor.clinic_phone or ''}", size=12, align='center'),
    ]


def patient_block(view: PrescriptionView) -> List[Block]:
    patient = view.patient
    return [
        Spacer(2, size=12),
        Text('PRESCRIPTION', size=14, underline=True),
        Spacer(1, size=14),
        Text(f"Patient Name: {patient.full_name}"),
        Text(f"Age: {patient.age} | Sex: {patient.sex}"),
        Text(f"Mobile: {patient.mobile or 'Not provided'}"),
        Text(f"Date: {format_date(view.created_at)}"),
        Text(f"Prescription ID: {view.prescription_id}"),
        Spacer(1),
    ]


def narrative(view: PrescriptionView) -> List[Block]:
    labelled = (
        ('Chief Complaint', view.chief_complaint),
        ('History', view.history_of_present_illness),
        ('Past Medical History', view.past_medical_history),
        ('Past Surgical History', view.past_surgical_history),
    )
    return [Text(f"{label}: {value}") for label, value in labelled if value]


def diagnosis(view: PrescriptionView) -> List[Block]:
    return [Spacer(1), Text(f"Diagnosis: {view.diagnosis}")]


def _medicine_title(line) -> str:
    if line.strength:
        return f"{line.name} ({line.strength})"
    return line.name


def medications(view: PrescriptionView) -> List[Block]:
    blocks: List[Block] = [
        Spacer(1),
        Text('Medications:', size=12, underline=True),
        Spacer(0.5, size=12),
    ]
    for index, line in enumerate(view.medicines, start=1):
        blocks.append(Text(f"{index}. {_medicine_title(line)}", size=12))
        blocks.append(Text(
            f"   Dosage: {line.dosage}, Frequency: {line.frequency}, Duration: {line.duration}",
            size=12
        ))
        if line.instructions:
            blocks.append(Text(f"   Instructions: {line.instructions}", size=12))
        blocks.append(Spacer(0.5, size=12))
    return blocks


def investigations(view: PrescriptionView) -> List[Block]:
    blocks: List[Block] = [
        Spacer(1),
        Text('Investigations Advised:', size=12, underline=True),
        Spacer(0.5, size=12),
    ]
    for index, line in enumerate(view.investigations, start=1):
        blocks.append(Text(f"{index}. {line.name}", size=12))
        if line.notes:
            blocks.append(Text(f"   Notes: {line.notes}", size=12))
    return blocks


def advice(view: PrescriptionView) -> List[Block]:
    return [Spacer(1), Text(f"Advice: {view.advice}")]


def follow_up(view: PrescriptionView) -> List[Block]:
    return [Spacer(1), Text(f"Follow-up Date: {format_date(view.follow_up_date)}")]


def consent(view: PrescriptionView) -> List[Block]:
    return [Spacer(1), Text(CONSENT_TEXT), Text(ADMISSION_TEXT)]


def signature(view: PrescriptionView) -> List[Block]:
    doctor = view.doctor
    return signature_blocks(
        doctor.full_name,
        doctor.qualification,
        doctor.registration_number,
        signature_path=doctor.digital_signature_path,
        stamp_path=doctor.stamp_image_path,
    )


PRESCRIPTION_SECTIONS = (
    (_has_letterhead, letterhead),
    (lambda view: not _has_letterhead(view), text_header),
    (always, patient_block),
    (always, narrative),
    (lambda view: bool(view.diagnosis), diagnosis),
    (lambda view: bool(view.medicines), medications),
    (lambda view: bool(view.investigations), investigations),
    (lambda view: bool(view.advice), advice),
    (lambda view: view.follow_up_date is not None, follow_up),
    (lambda view: view.consent_obtained, consent),
    (always, signature),
)


def prescription_blocks(view: PrescriptionView) -> List[Block]:
    return build_blocks(view, PRESCRIPTION_SECTIONS)


def prescription_filename(view: PrescriptionView) -> str:
    return f"prescription-{view.prescription_id}.pdf"


def render_prescription_pdf(view: PrescriptionView) -> bytes:
    """
    Render the prescription document.

    Raises:
        RenderError: the PDF engine failed
    """
    return render_pdf(
        'prescription',
        prescription_blocks(view),
        title=f"Prescription {view.prescription_id}",
    )
