class DxfStructException(Exception):
    '''Base class to extend in order to throw exception in dxfstruct.

    Other than the message it takes the chain of the layers (record and field
    names) that caused the exception and, when known, the line of the input
    stream where it happened.
    '''

    def __init__(self, message='', chain=None, line=None):
        self.message = message
        self.chain = chain if chain is not None else []
        self.line = line
        super().__init__(message)

    def __str__(self):
        msg = self.message
        if self.chain:
            msg = '%s: %s' % ('.'.join(self.chain), msg)
        if self.line is not None:
            msg = '%s (line %d)' % (msg, self.line)
        return msg


class TagStreamException(DxfStructException):
    '''The underlying stream is broken: this is not recoverable.'''
    pass


class EndOfStream(DxfStructException):
    '''No more tags to read. It's not an error by itself.'''
    pass


class DecodeException(DxfStructException):
    pass


class UnknownCodeException(DxfStructException):
    pass


class VersionException(DxfStructException):
    pass


class MarkerException(DxfStructException):
    pass


class LifecycleException(DxfStructException):
    pass


class RequiredFieldException(LifecycleException):
    pass


class ValidationException(DxfStructException):
    pass


class EncodeException(DxfStructException):
    '''The value of a field can't be represented on the wire.'''
    pass


class EnumException(DxfStructException):
    '''The value is not a member of the enum of the field.'''
    pass
