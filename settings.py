"""Runtime configuration for the festival sync job."""
import os
from dataclasses import dataclass
from pathlib import Path
from typing import Optional, Mapping


DEFAULT_USER_AGENT = (
    'Mozilla/5.0 (Windows NT 10.0; Win64; x64) AppleWebKit/537.36 '
    '(KHTML, like Gecko) Chrome/131.0.0.0 Safari/537.36'
)

LIST_PATH = '/site/s_culture/festival/festivalList.jsp'


@dataclass(frozen=True)
class ScraperSettings:
    """Settings for crawling the MCST festival listing and writing the dataset."""
    base_url: str = 'https://www.mcst.go.kr'
    output_path: Path = Path('src/data/festivals.js')
    timeout_seconds: int = 30
    page_delay_seconds: float = 0.4
    detail_delay_seconds: float = 0.25
    log_level: str = 'INFO'
    user_agent: str = DEFAULT_USER_AGENT

    @classmethod
    def from_env(cls, environ: Optional[Mapping[str, str]] = None) -> 'ScraperSettings':
        """
        Build settings from environment variables.

        Args:
            environ: Mapping to read from (default: os.environ)

        Returns:
            ScraperSettings with unset values left at their defaults
        """
        env = os.environ if environ is None else environ
        defaults = cls()
        return cls(
            base_url=env.get('MCST_BASE_URL', defaults.base_url).rstrip('/'),
            output_path=Path(env.get('FESTIVALS_OUTPUT_PATH', str(defaults.output_path))),
            timeout_seconds=int(env.get('TIMEOUT_SECONDS', defaults.timeout_seconds)),
            page_delay_seconds=float(env.get('PAGE_DELAY_SECONDS', defaults.page_delay_seconds)),
            detail_delay_seconds=float(
                env.get('DETAIL_DELAY_SECONDS', defaults.detail_delay_seconds)
            ),
            log_level=env.get('LOG_LEVEL', defaults.log_level),
            user_agent=env.get('USER_AGENT', defaults.user_agent),
        )

    def list_url(self, page_no: int) -> str:
        """Listing URL for a 1-based page number, with the site's empty search params."""
        return (
            f"{self.base_url}{LIST_PATH}?pMenuCD=&pCurrentPage={page_no}"
            "&pSearchType=&pSearchWord=&pSeq=&pSido=&pOrder=&pPeriod=&fromDt=&toDt="
        )


@dataclass(frozen=True)
class StatusSettings:
    """Repository identity used by the display-side workflow status badge."""
    repo_full_name: str = 'wonhwi/festival'
    workflow_file: str = 'auto-update-festivals.yml'

    @classmethod
    def from_env(cls, environ: Optional[Mapping[str, str]] = None) -> 'StatusSettings':
        env = os.environ if environ is None else environ
        defaults = cls()
        repo = env.get('GITHUB_REPO', '').strip() or defaults.repo_full_name
        workflow = env.get('GITHUB_WORKFLOW_FILE', '').strip() or defaults.workflow_file
        return cls(repo_full_name=repo, workflow_file=workflow)

    def _owner_repo(self):
        owner, _, repo = self.repo_full_name.partition('/')
        return owner, repo

    @property
    def runs_api_url(self) -> str:
        owner, repo = self._owner_repo()
        if not owner or not repo:
            return ''
        return (
            f"https://api.github.com/repos/{owner}/{repo}/actions/workflows/"
            f"{self.workflow_file}/runs?per_page=1"
        )

    @property
    def actions_url(self) -> str:
        owner, repo = self._owner_repo()
        if not owner or not repo:
            return ''
        return f"https://github.com/{owner}/{repo}/actions/workflows/{self.workflow_file}"
