from datetime import date, datetime, timezone


def utcnow():
    """Hora actual en UTC como datetime naive (las columnas DateTime no guardan tz).

    Conserva microsegundos para que dos escrituras consecutivas produzcan
    marcas de tiempo distintas.
    """
    return datetime.now(timezone.utc).replace(tzinfo=None)


def safe_iso(value):
    """Devuelve value.isoformat() para date/datetime, o None.

    Los datetime naive se asumen en UTC y se serializan con sufijo de zona.
    Cualquier otro valor se devuelve como cadena.
    """
    if value is None:
        return None

    if isinstance(value, datetime):
        if value.tzinfo is None:
            value = value.replace(tzinfo=timezone.utc)
        return value.isoformat()

    if isinstance(value, date):
        return value.isoformat()

    return str(value)
