"""
.env file discovery for Gist Manager.

Looks for a .env file from the working directory upward and loads the
first one found into the process environment, so GIST_MANAGER_* and
GITHUB_TOKEN values can live next to a project.
"""

from pathlib import Path
from typing import Optional, Dict, List
import logging

from dotenv import dotenv_values, load_dotenv

logger = logging.getLogger(__name__)


EXAMPLE_ENV = """# Gist Manager Configuration
# Lines starting with # are comments and will be ignored.

# GitHub token with the "gist" scope. GITHUB_TOKEN is honoured as well.
GIST_MANAGER_TOKEN=your-token-here

# Optional: API configuration
GIST_MANAGER_API_BASE_URL=https://api.github.com
GIST_MANAGER_API_VERSION=2022-11-28

# Optional: authentication sources
GIST_MANAGER_USE_GH_CLI=true
GIST_MANAGER_INTERACTIVE_LOGIN=true

# Optional: UI and debug settings
GIST_MANAGER_THEME=monokai
GIST_MANAGER_LOG_LEVEL=WARNING
GIST_MANAGER_DEBUG=false
"""


class EnvFileLoader:
    """
    .env loader with hierarchical search.

    Search order (stops at first file found):
    1. Current directory: .gist-manager/.env -> .env
    2. Parent directories (up to git root or home): .gist-manager/.env -> .env
    3. Home directory: ~/.gist-manager/.env -> ~/.env
    """

    CONFIG_DIR_NAME = ".gist-manager"
    ENV_FILE_NAME = ".env"

    def __init__(self, working_directory: Optional[Path] = None):
        self.working_directory = Path(working_directory or Path.cwd()).resolve()
        self._loaded_file: Optional[Path] = None
        self._loaded_vars: Dict[str, str] = {}

    def load_env_file(self) -> Optional[Path]:
        """Load environment variables from the first .env file found.

        Values already present in the environment win over the file.

        Returns:
            Path to loaded .env file or None if none found
        """
        env_file_path = self._find_env_file()

        if env_file_path is None:
            logger.debug("No .env file found in search path")
            return None

        load_dotenv(env_file_path, override=False)
        self._loaded_file = env_file_path
        self._loaded_vars = {
            key: value
            for key, value in dotenv_values(env_file_path).items()
            if value is not None
        }
        logger.info(f"Loaded environment variables from: {env_file_path}")
        return env_file_path

    def get_loaded_file(self) -> Optional[Path]:
        """Path to the loaded .env file, if any."""
        return self._loaded_file

    def get_loaded_vars(self) -> Dict[str, str]:
        """Variables read from the loaded .env file."""
        return self._loaded_vars.copy()

    def get_search_paths(self) -> List[Path]:
        """Get list of all paths that would be searched for .env files.

        Returns:
            List of search paths in order
        """
        search_paths = []
        current_dir = self.working_directory

        while current_dir != current_dir.parent:
            search_paths.append(current_dir / self.CONFIG_DIR_NAME / self.ENV_FILE_NAME)
            search_paths.append(current_dir / self.ENV_FILE_NAME)

            if self._should_stop_search(current_dir):
                break

            current_dir = current_dir.parent

        home_dir = Path.home()
        search_paths.append(home_dir / self.CONFIG_DIR_NAME / self.ENV_FILE_NAME)
        search_paths.append(home_dir / self.ENV_FILE_NAME)

        return search_paths

    def _find_env_file(self) -> Optional[Path]:
        for candidate in self.get_search_paths():
            if candidate.is_file():
                return candidate
        return None

    def _should_stop_search(self, directory: Path) -> bool:
        # Git repository root or home directory
        return (directory / ".git").exists() or directory == Path.home()

    def create_example_env_file(self, target_dir: Optional[Path] = None) -> Path:
        """Create an example .env file under the project config directory.

        Args:
            target_dir: Directory to create file in (default: .gist-manager
                under the working directory)

        Returns:
            Path to created example file
        """
        if target_dir is None:
            target_dir = self.working_directory / self.CONFIG_DIR_NAME

        target_dir.mkdir(parents=True, exist_ok=True)
        env_file_path = target_dir / self.ENV_FILE_NAME
        env_file_path.write_text(EXAMPLE_ENV, encoding="utf-8")

        logger.info(f"Created example .env file: {env_file_path}")
        return env_file_path


def load_env_with_hierarchy(working_directory: Optional[Path] = None) -> Optional[Path]:
    """Load the nearest .env file into the process environment."""
    return EnvFileLoader(working_directory).load_env_file()
