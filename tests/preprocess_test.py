from academic_records.preprocess import OFFERING_NOISE, TRANSCRIPT_NOISE, preprocess, split_lines


def test_split_lines_trims_and_drops_empty():
    text = "  uno  \r\n\r\n dos\n\t\ntres\xa0\n"
    assert split_lines(text) == ["uno", "dos", "tres"]


def test_transcript_noise_is_accent_and_case_tolerant():
    text = "\n".join(
        [
            "PÁGINA 2 DE 5",
            "Pagina 3 de 5",
            "Ingenieria en Informatica",
            "Historia Académica",
            "ALUMNO: PEREZ, JUAN",
            "Nº Documento 12345678",
            "N°OrigenCódigo",
            "Acta / Resolución",
            "FechaNota",
            "26Equivalencia03624",
        ]
    )
    assert preprocess(text, TRANSCRIPT_NOISE) == ["26Equivalencia03624"]


def test_offering_noise_keeps_data_lines():
    text = "\n".join(
        [
            "Menú",
            "Mis datos",
            "Oferta de Materias - Ingeniería",
            "0902INGLES NIVEL II1300Lu08a12 Semipresencial",
            "3 de 7",
        ]
    )
    assert preprocess(text, OFFERING_NOISE) == ["0902INGLES NIVEL II1300Lu08a12 Semipresencial"]


def test_data_lines_with_slashes_survive():
    lines = ["0431/202221/12/20229", "INFORMACION"]
    assert preprocess("\n".join(lines)) == lines


def test_all_boilerplate_is_empty():
    assert preprocess("Página 1 de 1\n\nUniversidad Nacional de La Matanza\n") == []
    assert preprocess("") == []
