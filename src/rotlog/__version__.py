__title__ = "rotlog"
__description__ = "Asynchronous time-rotating file logger."
__url__ = ""
__version__ = "0.1.0"
__author__ = "The rotlog Authors"
__author_email__ = ""
__license__ = "MIT"
