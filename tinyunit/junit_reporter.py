"""
Reporter writing JUnit XML files, one per test class.
"""

import re
from pathlib import Path
from typing import Any, ClassVar, TextIO
from xml.sax.saxutils import escape, quoteattr

from tinyunit.config import DEFAULT_VERBOSITY
from tinyunit.reporter import Reporter
from tinyunit.test_result import TestResult


class JUnitReporter(Reporter):
    """
    Writes a <testsuite> document for every class run.

    The file of a class is opened when the class starts and closed when it
    ends. end_suite closes whatever is still open.

    Attributes
    ----------
    output_dir : Path
        Directory receiving the XML files
    written_files : list[Path]
        Files produced so far, in creation order
    """
    FAILURE_TYPE: ClassVar[str] = "python runtime error"

    def __init__(
        self,
        result: TestResult,
        verbosity: int = DEFAULT_VERBOSITY,
        runner: Any = None,
        output_dir: Path | None = None,
    ) -> None:
        super().__init__(result, verbosity, runner)
        self.output_dir: Path = Path(output_dir) if output_dir is not None else Path.cwd()
        self.written_files: list[Path] = []
        self._xml_file: TextIO | None = None


    @staticmethod
    def file_name_for(class_name: str) -> str:
        """
        Returns the XML file name used for a class.

        Parameters
        ----------
        class_name : str
            Name of the test class

        Returns
        -------
        str
            Lower-cased class name stripped of characters unsafe in file
            names, with an .xml extension
        """
        stem: str = re.sub(r"[^\w.\-]", "", class_name.lower()) or "tests"
        return f"{stem}.xml"


    def path_for(self, class_name: str) -> Path:
        """
        Returns the file a class is written to.

        A file already written in this suite, by the same class run again
        or by a name differing only in case, is never overwritten: a
        numeric suffix is added instead.

        Parameters
        ----------
        class_name : str
            Name of the test class

        Returns
        -------
        Path
            Path in output_dir not written yet by this reporter
        """
        file_name: str = self.file_name_for(class_name)
        path: Path = self.output_dir / file_name
        stem: str = file_name[:-len(".xml")]
        index: int = 2
        while path in self.written_files:
            path = self.output_dir / f"{stem}_{index}.xml"
            index += 1
        return path


    def start_class(self, class_name: str) -> None:
        self._close_file()
        self.output_dir.mkdir(parents=True, exist_ok=True)
        path: Path = self.path_for(class_name)
        self._xml_file = path.open("w", encoding="utf-8")
        self.written_files.append(path)
        self._xml_file.write(f"<testsuite name={quoteattr(class_name)}>\n")


    def start_test(self, test_name: str) -> None:
        if self._xml_file is None:
            return
        self._xml_file.write(
            f"<testcase classname={quoteattr(self.result.current_class_name)} "
            f"name={quoteattr(test_name)}>"
        )


    def add_failure(self, message: str, stack_trace: str) -> None:
        if self._xml_file is None:
            return
        self._xml_file.write(
            f"<failure type={quoteattr(self.FAILURE_TYPE)}>{escape(message)}</failure>\n"
        )
        # "]]>" cannot appear inside a CDATA section
        trace: str = stack_trace.replace("]]>", "]]]]><![CDATA[>")
        self._xml_file.write(f"<system-err><![CDATA[{trace}]]></system-err>\n")


    def end_test(self, has_failure: bool) -> None:
        if self._xml_file is not None:
            self._xml_file.write("</testcase>\n")


    def end_class(self) -> None:
        self._close_file()


    def end_suite(self) -> int:
        self._close_file()
        return self.result.failure_count


    def close(self) -> None:
        self._close_file()


    def _close_file(self) -> None:
        if self._xml_file is None:
            return
        try:
            self._xml_file.write("</testsuite>\n")
        finally:
            self._xml_file.close()
            self._xml_file = None
