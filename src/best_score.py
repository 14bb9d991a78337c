"""
best score persistence

a tiny key-value store the front ends read the best score from and
write it back to, saves never lower what is already recorded
"""
import os
import pickle


BEST_SCORE_FILE = "best_score.pkl"
BEST_KEY = "bestScore"


class MemoryBestStore:
    """best score kept for the lifetime of the process"""

    def __init__(self, best=0):
        self.best = best

    def load_best(self):
        return self.best

    def save_best(self, value):
        self.best = max(self.best, value)
        return self.best


class BestScoreStore:
    """best score kept in a pickled dict on disk"""

    def __init__(self, filepath=BEST_SCORE_FILE):
        self.filepath = filepath

    def _read(self):
        if not os.path.exists(self.filepath):
            return {}
        with open(self.filepath, 'rb') as f:
            data = pickle.load(f)
        if not isinstance(data, dict):
            raise ValueError(f"Unexpected best score data in {self.filepath}")
        return data

    def load_best(self):
        """stored best score, 0 if nothing was saved yet"""
        return int(self._read().get(BEST_KEY, 0))

    def save_best(self, value):
        """
        store max(existing, value)

        returns the best score now on disk
        """
        data = self._read()
        best = max(int(data.get(BEST_KEY, 0)), int(value))
        if best == data.get(BEST_KEY):
            return best

        data[BEST_KEY] = best
        directory = os.path.dirname(self.filepath)
        if directory:
            os.makedirs(directory, exist_ok=True)
        with open(self.filepath, 'wb') as f:
            pickle.dump(data, f)
        print(f"Best score {best} saved to {self.filepath}")
        return best
