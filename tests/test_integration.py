"""Integration tests for end-to-end report generation."""

from unittest.mock import patch

import pytest

from omsc.fetcher import FetchError
from omsc.flags import FlagLookup
from omsc.report import build_reports, generate_reports
from omsc.schemas import ReportConfig


def roster_entry(name, flag):
    src = f'/w/images/thumb/1/1a/Flag{flag}.png/25px-Flag{flag}.png'
    return f'<p>• <span><img src="{src}"></span> {name}</p>'


def table(headers, rows):
    head = ''.join(f'<th>{h}</th>' for h in headers)
    body = ''.join('<tr>' + ''.join(f'<td>{c}</td>' for c in row) + '</tr>' for row in rows)
    return f'<table class="wikitable"><tr>{head}</tr>{body}</table>'


COUNTRY_HEADERS = ['Edition', 'Artist(s)', 'Song', 'Language', 'Place', 'Points']
MEMBER_HEADERS = [
    'Edition', 'Country', 'Artist(s)', 'Song', 'Language',
    'GF Place', 'GF Points', 'SF Place', 'SF Points',
]

# Tables appear in the same alphabetical order as the roster
COUNTRY_PAGE = ''.join([
    roster_entry('Sweden', 'Sweden'),
    roster_entry('Norway', 'Norway'),
    table(COUNTRY_HEADERS, [
        ['Edition 1', 'a-ha', 'Take On Me', 'English', '2', '100'],
        ['Edition 2', 'Aurora', 'Runaway', 'English', '5', '50'],
    ]),
    table(COUNTRY_HEADERS, [
        ['Edition 1', 'ABBA', 'Waterloo', 'English', '1', '120'],
        ['Edition 3', 'Robyn', 'Dancing On My Own', 'English', '3', '60'],
        ['Edition 4', 'Loreen', 'Tattoo', 'English', '', 'TBA'],
    ]),
])

MEMBER_PAGE = ''.join([
    roster_entry('Alice', 'Sweden'),
    table(MEMBER_HEADERS, [
        ['Edition 1', 'Sweden', 'ABBA', 'Waterloo', 'English', '2', '150', '', ''],
        ['Edition 2', 'Sweden', 'Robyn', 'Hang', 'English', '', '', '12', '20'],
    ]),
])

CONFIG = ReportConfig(country_pages=['Countries'], member_pages=['Members'], fetch_workers=1)
PAGES = {'Countries': COUNTRY_PAGE, 'Members': MEMBER_PAGE}


class FakeFetcher:
    """Stands in for WikiFetcher with canned pages."""

    def __init__(self, pages, fail=None):
        self.pages = pages
        self.fail = fail
        self.requested = []

    def fetch_pages(self, pages):
        self.requested.extend(pages)
        if self.fail:
            raise FetchError(self.fail, 'connection refused')
        return {page: self.pages[page] for page in pages}


class TestBuildReports:
    """Tests for building reports from fetched HTML."""

    def test_full_run(self):
        """Test all four reports from a small wiki."""
        reports, transitions = build_reports(PAGES, CONFIG, FlagLookup())

        assert reports['all-time-results.txt'] == (
            '🥇 **🇸🇪 Sweden - 180 points**\n'
            '🥈 **🇳🇴 Norway - 150 points**\n'
        )
        assert reports['average-scores-final.txt'] == (
            '🥇 **🇸🇪 Sweden - 90 points**\n'
            '🥈 **🇳🇴 Norway - 75 points**\n'
        )
        assert reports['average-scores-members.txt'] == '🥇 **🇸🇪 Alice - 2**\n'
        assert reports['last-countries-participations.txt'] == (
            '🇳🇴 Norway 2 (+2)\n'
            '🇸🇪 **Sweden 4**\n'
        )
        assert transitions == []

    def test_current_edition(self):
        """Test an explicit edition caps aggregation and sets the reference."""
        reports, _ = build_reports(PAGES, CONFIG, FlagLookup(), current_edition=1)

        assert reports['all-time-results.txt'] == (
            '🥇 **🇸🇪 Sweden - 120 points**\n'
            '🥈 **🇳🇴 Norway - 100 points**\n'
        )
        assert reports['last-countries-participations.txt'] == (
            '🇳🇴 **Norway 1**\n'
            '🇸🇪 **Sweden 1**\n'
        )

    def test_zero_current_edition_infers(self):
        """Test an edition of 0 behaves like no edition for every report."""
        inferred, _ = build_reports(PAGES, CONFIG, FlagLookup())
        zero, _ = build_reports(PAGES, CONFIG, FlagLookup(), current_edition=0)

        assert zero == inferred
        assert zero['all-time-results.txt'].startswith('🥇 **🇸🇪 Sweden - 180 points**')
        assert zero['last-countries-participations.txt'].endswith('🇸🇪 **Sweden 4**\n')

    def test_flag_overrides(self):
        """Test override glyphs reach the report text."""
        reports, _ = build_reports(PAGES, CONFIG, FlagLookup({'Norway': 'NO'}))
        assert 'NO Norway - 150 points' in reports['all-time-results.txt']


class TestGenerateReports:
    """Tests for the fetch-build-write pipeline."""

    def test_writes_all_reports(self, tmp_path):
        """Test every report file is written under the output directory."""
        fetcher = FakeFetcher(PAGES)
        written = generate_reports(
            output_dir=tmp_path / 'dist',
            config=CONFIG,
            fetcher=fetcher,
            flags=FlagLookup(),
        )

        assert fetcher.requested == ['Countries', 'Members']
        assert sorted(path.name for path in written) == [
            'all-time-results.txt',
            'average-scores-final.txt',
            'average-scores-members.txt',
            'last-countries-participations.txt',
        ]
        text = (tmp_path / 'dist' / 'all-time-results.txt').read_text(encoding='utf-8')
        assert text.startswith('🥇 **🇸🇪 Sweden - 180 points**')

    def test_fetch_failure_writes_nothing(self, tmp_path):
        """Test a failed page aborts before any file is written."""
        fetcher = FakeFetcher(PAGES, fail='https://wiki/Members')
        with pytest.raises(FetchError):
            generate_reports(
                output_dir=tmp_path / 'dist',
                config=CONFIG,
                fetcher=fetcher,
                flags=FlagLookup(),
            )
        assert not (tmp_path / 'dist').exists()

    def test_write_failure_leaves_no_partial_set(self, tmp_path):
        """Test a failing write keeps earlier reports and staging files out of the tree."""
        from omsc.utils import write_text as real_write

        output_dir = tmp_path / 'dist'
        output_dir.mkdir()
        (output_dir / 'all-time-results.txt').write_text('previous run', encoding='utf-8')
        calls = []

        def flaky_write(path, text, create_dirs=True):
            calls.append(path)
            if len(calls) == 2:
                raise OSError('disk full')
            real_write(path, text, create_dirs=create_dirs)

        with patch('omsc.report.write_text', side_effect=flaky_write):
            with pytest.raises(OSError, match='disk full'):
                generate_reports(
                    output_dir=output_dir,
                    config=CONFIG,
                    fetcher=FakeFetcher(PAGES),
                    flags=FlagLookup(),
                )

        assert sorted(p.name for p in output_dir.iterdir()) == ['all-time-results.txt']
        assert (output_dir / 'all-time-results.txt').read_text(encoding='utf-8') == 'previous run'
        assert sorted(p.name for p in tmp_path.iterdir()) == ['dist']

    def test_cli_exits_on_fetch_failure(self, tmp_path):
        """Test the CLI exits with status 1 when a fetch fails."""
        import omsc_report

        argv = ['omsc_report.py', '--no-log-file', '--output-dir', str(tmp_path)]
        with patch('sys.argv', argv), patch('omsc_report.setup_logging'), patch(
            'omsc_report.generate_reports',
            side_effect=FetchError('https://wiki/Countries', 'timeout'),
        ):
            with pytest.raises(SystemExit) as excinfo:
                omsc_report.main()
        assert excinfo.value.code == 1

    def test_cli_rejects_negative_edition(self):
        """Test a negative current edition is a usage error."""
        import omsc_report

        argv = ['omsc_report.py', '--no-log-file', '--current-edition', '-3']
        with patch('sys.argv', argv), patch('omsc_report.generate_reports') as generate:
            with pytest.raises(SystemExit) as excinfo:
                omsc_report.main()
        assert excinfo.value.code == 2
        generate.assert_not_called()
