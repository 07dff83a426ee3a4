import csv


class LowerCaseDictReader(csv.DictReader):
    """A CSV DictReader whose header names are stripped and lowercase.

    Headers then match SQLAlchemy column names written in any case, ie
    ' Joined_On' reads as 'joined_on'.  Use it the same as any csv.DictReader.
    """

    @property
    def fieldnames(self):
        names = super().fieldnames
        return None if names is None else [name.strip().lower() for name in names]

    @fieldnames.setter
    def fieldnames(self, value):
        self._fieldnames = value
