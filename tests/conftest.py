import pytest

from samples import OPEN_HEADER, SETTLED_HEADER, SISTEMA_HEADER


@pytest.fixture
def settled_text() -> str:
    return "\n".join(
        [
            SETTLED_HEADER,
            "1;7;55;900;CROSBY;573456/001;10/05/2025;123.456.789-01;ACME LTDA;1.000,00;12,50;5,00;950,00;"
            "1.000,00;DM;PAGO;15/05/2025;LIQUIDACAO NORMAL;SIMPLES;3",
            "2;7;55;900;CROSBY;573456/002;10/06/2025;123.456.789-01;ACME LTDA;1.000,00;0,00;0,00;1.000,00;"
            "1.000,00;DM;PAGO;10/06/2025;LIQUIDACAO NORMAL;SIMPLES;3",
            "",
        ]
    )


@pytest.fixture
def open_text() -> str:
    return "\n".join(
        [
            OPEN_HEADER,
            "2;3;900;CROSBY;0;600100;00012345;500,00;500,00;7,25;507,25;01/04/2025;12.345.678/0001-90;"
            "BETA SA;DM;0341;VENCIDO;SIMPLES;EM COBRANCA;56;39",
            "",
        ]
    )


@pytest.fixture
def sistema_text() -> str:
    return "\n".join(
        [
            SISTEMA_HEADER,
            "44748;COLLYER & SOARES LTDA;57.220.226.0001/15;100;390.048;1;Fatura;422;24/10/2024;"
            "23/11/2024;23/11/2024;25/11/2024;30.168,98",
            "44749;LOJA DOIS ME;11.222.333/0001-44;100;390.049;2;Fatura;422;24/10/2024;"
            "23/12/2024;23/12/2024;;1.500,00",
            "",
        ]
    )
