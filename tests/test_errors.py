from asciigrid.errors import AsciiGridError, ConfigurationError, DecodeError, SourceUnavailableError, error_message


def test_taxonomy():
    for cls in (ConfigurationError, DecodeError, SourceUnavailableError):
        assert issubclass(cls, AsciiGridError)
    assert issubclass(ConfigurationError, ValueError)


def test_error_message_uses_text():
    assert error_message(DecodeError("cannot identify image file")) == "cannot identify image file"


def test_error_message_falls_back_to_class_name():
    assert error_message(DecodeError()) == "DecodeError"
    assert error_message(RuntimeError("   ")) == "RuntimeError"
