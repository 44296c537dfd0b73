"""Global constants for rush-deploy"""

import re
from enum import Enum

APP_NAME = "rush-deploy"

# Logging
LOG_FORMAT = "%(message)s"

# Registry
RUSH_JSON_FILENAME = "rush.json"
RUSH_JSON_ENV_VAR = "RUSH_DEPLOY_RUSH_JSON"
COMMON_FOLDER_NAME = "common"

# Scenario files live under <common>/config/deploy-scenarios/<name>.json
DEPLOY_SCENARIOS_DIR = "config/deploy-scenarios"
SCENARIO_FILE_EXTENSION = ".json"
DEFAULT_DEPLOY_FOLDER_NAME = "deploy"
DEFAULT_SCENARIO_NAME = "deploy"
SCENARIO_NAME_PATTERN = re.compile(r"^[a-z0-9][a-z0-9._-]*$")

# Package layout
PACKAGE_JSON_FILENAME = "package.json"
NODE_MODULES_FOLDER_NAME = "node_modules"

# Deployment output
DEPLOY_METADATA_FILENAME = "deploy-metadata.json"


class SymlinkCreation(Enum):
    """How recorded links are materialized in the deployment"""
    DEFAULT = "default"
    SCRIPT = "script"
    NONE = "none"


class LinkKind(Enum):
    """Kind of a symbolic link found in the source tree"""
    FILE_LINK = "fileLink"
    FOLDER_LINK = "folderLink"


class LinkAction(Enum):
    """Actions supported by the create-links command"""
    CREATE = "create"
    REMOVE = "remove"


# npm publish rules applied to local projects when includeNpmIgnoreFiles is false
NPM_IGNORE_FILENAME = ".npmignore"
GIT_IGNORE_FILENAME = ".gitignore"

# Always published when found at the package root (case-insensitive prefixes)
PACKLIST_ALWAYS_INCLUDED_PREFIXES = [
    "package.json",
    "readme",
    "license",
    "licence",
    "changelog",
]

# Never published, wherever they appear
PACKLIST_ALWAYS_EXCLUDED = [
    ".git",
    ".svn",
    ".hg",
    "CVS",
    NODE_MODULES_FOLDER_NAME,
    ".npmrc",
    ".DS_Store",
    "npm-debug.log",
    "package-lock.json",
    "*.orig",
    ".*.swp",
]

# Error codes
ERROR_SCENARIO_NOT_FOUND = "RD101"
ERROR_SCENARIO_CONFIG = "RD102"
ERROR_PROJECT_NOT_FOUND = "RD103"
ERROR_REGISTRY_NOT_FOUND = "RD104"
ERROR_REGISTRY_CONFIG = "RD105"
ERROR_TARGET_FOLDER = "RD201"
ERROR_DEPENDENCY_RESOLUTION = "RD301"
ERROR_PACKAGE_JSON_NOT_FOUND = "RD302"
ERROR_COPY_COLLISION = "RD401"
ERROR_LINK_TARGET_NOT_FOUND = "RD402"
ERROR_PATH_OUTSIDE_ROOT = "RD403"
ERROR_DEPLOY_METADATA = "RD404"

# Display constants
EMOJI_SUCCESS = "✓"
EMOJI_ERROR = "✗"
EMOJI_LINK = "🔗"
EMOJI_FOLDER = "📁"

# Messages templates
MSG_ANALYZING_PROJECT = 'Analyzing project "{project}"'
MSG_PREPARING_SUBDEPLOYMENT = 'Preparing subdeployment for "{folder}"'
MSG_DEPLOY_TARGET = "Deploying to target folder: {target}"
MSG_DELETING_TARGET = 'Deleting folder contents because "--overwrite" was specified...'
