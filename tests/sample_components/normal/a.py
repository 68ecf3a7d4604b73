from chibi.context import component


@component
class A:
    pass
