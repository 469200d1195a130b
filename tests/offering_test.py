from academic_records.models import OfferingHeaderState
from academic_records.parse_offering import (
    classify_suffix,
    clean_description,
    parse_offering_lines,
    parse_offering_text,
    step_offering,
)


def test_merged_cell_inherits_previous_header():
    report = parse_offering_lines(
        [
            "0902INGLES NIVEL II1300Lu08a12 Semipresencial",
            "1600Ma14a18 Semipresencial",
        ]
    )
    assert report.skipped == []
    first, second = report.records
    assert first.plan_code == "902"
    assert first.description == "INGLES NIVEL II"
    assert first.commission == "1300"
    assert (first.day_label, first.period_label) == ("Lunes", "Mañana")
    assert first.modality == "Semipresencial"
    assert second.plan_code == "902"
    assert second.description == "INGLES NIVEL II"
    assert second.commission == "1600"
    assert second.day_label == "Martes"
    assert second.period_label == "Tarde"


def test_composite_token_expands_to_one_slot_per_day():
    slots = parse_offering_lines(["0902INGLES NIVEL II1300MaVi12a14 Presencial San Justo"]).records
    assert [(s.day_label, s.period_label) for s in slots] == [
        ("Martes", "Tarde"),
        ("Viernes", "Tarde"),
    ]
    for s in slots:
        assert s.commission == "1300"
        assert s.modality == "Presencial"
        assert s.location == "San Justo"
        assert s.raw_token == "MaVi12a14"


def test_remote_token_yields_single_slot():
    (slot,) = parse_offering_lines(["0903INGLES NIVEL III1500A distancia Virtual"]).records
    assert slot.day_label == "A distancia"
    assert slot.period_label == "Sin horario"
    assert slot.modality == "Virtual"
    assert slot.commission == "1500"


def test_remote_token_without_modality_keyword():
    (slot,) = parse_offering_lines(["0903INGLES NIVEL III1500A distancia"]).records
    assert slot.modality == "A distancia"
    assert slot.location == "Desconocida"


def test_unknown_day_code_emits_placeholder_slot():
    (slot,) = parse_offering_lines(["0904TALLER2000Do08a12 Presencial"]).records
    assert slot.plan_code == "904"
    assert slot.day_label == "Desconocido"
    assert slot.period_label == "Desconocido"


def test_not_offered_commission_is_skipped_but_updates_header():
    report = parse_offering_lines(
        [
            "0905ETICANo ofertadaLu08a12",
            "1400Ma19a23 Presencial",
        ]
    )
    assert report.skipped == []
    (slot,) = report.records
    assert (slot.plan_code, slot.description) == ("905", "ETICA")
    assert (slot.day_label, slot.period_label) == ("Martes", "Noche")


def test_row_without_any_header_is_skipped():
    report = parse_offering_lines(["1300Lu08a12 Presencial"])
    assert report.records == []
    assert len(report.skipped) == 1
    assert "without a subject header" in report.skipped[0].reason


def test_header_line_then_bare_commission_rows():
    slots = parse_offering_lines(
        [
            "0906INTRODUCCION A LOS SISTEMAS DE",
            "INFORMACION",
            "1300Lu19a23 Presencial",
            "1400Sa08a12 Presencial",
        ]
    ).records
    assert [s.description for s in slots] == ["INTRODUCCION A LOS SISTEMAS DE INFORMACION"] * 2
    assert [(s.day_label, s.period_label) for s in slots] == [
        ("Lunes", "Noche"),
        ("Sábado", "Mañana"),
    ]


def test_wrapped_description_followed_by_commission():
    (slot,) = parse_offering_lines(
        [
            "0906INTRODUCCION A LOS SISTEMAS DE",
            "INFORMACION1300Lu19a23 Presencial",
        ]
    ).records
    assert slot.plan_code == "906"
    assert slot.description == "INTRODUCCION A LOS SISTEMAS DE INFORMACION"
    assert slot.commission == "1300"


def test_url_and_bare_code_lines_are_not_continuations():
    (slot,) = parse_offering_lines(
        [
            "0907FISICA I",
            "https://alumno2.unlam.edu.ar/oferta.php",
            "2001",
            "1300Lu08a12 Presencial",
        ]
    ).records
    assert slot.description == "FISICA I"


def test_continuation_stops_after_a_row():
    state = OfferingHeaderState()
    step_offering("0908QUIMICA1300Lu08a12 Presencial", state)
    assert not state.pending
    assert step_offering("TEXTO SUELTO", state) == []
    assert state.description == "QUIMICA"


def test_trailing_campus_removed_from_description():
    (slot,) = parse_offering_lines(["0908QUIMICA SAN JUSTO1300Lu08a12 Presencial"]).records
    assert slot.description == "QUIMICA"
    assert clean_description("  ANALISIS   MATEMATICO  I  ") == "ANALISIS MATEMATICO I"
    assert clean_description("ANALISIS MATEMATICO I Gonzalez Catan") == "ANALISIS MATEMATICO I"


def test_classify_suffix():
    assert classify_suffix("Semipresencial San Justo") == ("Semipresencial", "San Justo")
    assert classify_suffix("PresencialGonzález Catán") == ("Presencial", "González Catán")
    assert classify_suffix("Remota") == ("A distancia", "Desconocida")
    assert classify_suffix("") == ("Desconocida", "Desconocida")


def test_header_state_is_not_shared_between_calls():
    parse_offering_lines(["0902INGLES NIVEL II1300Lu08a12 Semipresencial"])
    report = parse_offering_lines(["1600Ma14a18 Semipresencial"])
    assert report.records == []
    assert len(report.skipped) == 1


def test_offering_boilerplate_is_filtered():
    text = "\n".join(
        [
            "19/10/2026, 10:32 Oferta de Materias",
            "Universidad Nacional de La Matanza",
            "Oferta de Materias",
            "Inicio",
            "Cerrar sesión",
            "Código Descripción Comisión Horario Modalidad Sede",
            "0902INGLES NIVEL II1300Lu08a12 Semipresencial",
            "Página 1 de 2",
            "1600Ma14a18 Semipresencial",
        ]
    )
    slots = parse_offering_text(text)
    assert [(s.plan_code, s.day_label) for s in slots] == [("902", "Lunes"), ("902", "Martes")]


def test_offering_parsing_is_idempotent():
    text = "0902INGLES NIVEL II1300MaVi12a14 Presencial\n1600Ma14a18 Semipresencial"
    assert parse_offering_text(text) == parse_offering_text(text)


def test_header_ending_in_digits_keeps_full_description():
    slots = parse_offering_lines(
        [
            "0910ANALISIS MATEMATICO 2",
            "1300Lu08a12 Presencial",
            "1400Ju14a18 Presencial",
        ]
    ).records
    assert [(s.plan_code, s.description, s.commission) for s in slots] == [
        ("910", "ANALISIS MATEMATICO 2", "1300"),
        ("910", "ANALISIS MATEMATICO 2", "1400"),
    ]


def test_remote_words_inside_subject_name_are_not_the_token():
    report = parse_offering_lines(["0912EDUCACION A DISTANCIA1300Lu08a12 Presencial"])
    assert report.skipped == []
    (slot,) = report.records
    assert slot.description == "EDUCACION A DISTANCIA"
    assert slot.commission == "1300"
    assert (slot.day_label, slot.period_label) == ("Lunes", "Mañana")

    (remote,) = parse_offering_lines(["0912EDUCACION A DISTANCIA1300A distancia"]).records
    assert remote.description == "EDUCACION A DISTANCIA"
    assert remote.day_label == "A distancia"


def test_campus_virtual_is_a_location_not_a_modality():
    assert classify_suffix("Campus Virtual") == ("Desconocida", "Campus Virtual")
    assert classify_suffix("Virtual Campus Virtual") == ("Virtual", "Campus Virtual")
    (slot,) = parse_offering_lines(["0903INGLES NIVEL III1500A distancia Campus Virtual"]).records
    assert slot.modality == "A distancia"
    assert slot.location == "Campus Virtual"
