# tests/factories.py

VALID_CNPJ = "11222333000181"
OTHER_VALID_CNPJ = "11444777000161"


def make_cnpj(n: int) -> str:
    """Build a valid CNPJ from a sequence number"""
    base = [int(c) for c in f"{n + 10:08d}0001"]

    def digit(digits, weights):
        remainder = sum(d * w for d, w in zip(digits, weights)) % 11
        return 0 if remainder < 2 else 11 - remainder

    first = digit(base, (5, 4, 3, 2, 9, 8, 7, 6, 5, 4, 3, 2))
    second = digit(base + [first], (6, 5, 4, 3, 2, 9, 8, 7, 6, 5, 4, 3, 2))
    return "".join(str(d) for d in base + [first, second])


def make_payload(**overrides):
    payload = {
        "name": "Acme Industria Ltda",
        "email": "contato@acme.com.br",
        "phone": "11999990000",
        "cnpj": "11.222.333/0001-81",
        "cep": "01310-100",
        "address": "Avenida Paulista",
        "number": "1000",
        "complement": "Sala 12",
        "neighborhood": "Bela Vista",
        "city": "São Paulo",
        "state": "sp",
        "sector": "Manufacturing",
    }
    payload.update(overrides)
    return payload
