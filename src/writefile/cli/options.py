import typer


def read_input(input_file: str | None) -> bytes:
    if input_file is None or input_file == "-":
        return typer.get_binary_stream("stdin").read()
    try:
        with open(input_file, "rb") as f:
            return f.read()
    except FileNotFoundError:
        raise typer.BadParameter(f"Input file not found: {input_file}") from None
    except IsADirectoryError:
        raise typer.BadParameter(f"Input is a directory: {input_file}") from None
