class UnionFind(object):
    """
    Disjoint sets over the integer IDs 0 ... NumElements-1.

    IDs start out unassigned (NOSET) and are brought into a set with MakeSet()
    or ExtendSetByID(). Every set carries a representative ID chosen by the caller,
    which is independent from the internal root of the set.
    Roots are kept shallow using path compression and union by rank.
    """

    NOSET = -1

    def __init__(self, NumElements):
        self.Parent = [UnionFind.NOSET] * NumElements
        self.Rank = [0] * NumElements
        self.Representative = [UnionFind.NOSET] * NumElements
        self.NumSets = 0

    def MakeSet(self, ID):
        """Creates a new set containing only ID. ID represents its own set."""
        if (self.Parent[ID] != UnionFind.NOSET):
            raise ValueError("ID %d is already part of a set" % ID)
        self.Parent[ID] = ID
        self.Rank[ID] = 0
        self.Representative[ID] = ID
        self.NumSets += 1

    def ExtendSetByID(self, Root, ID):
        """Adds the unassigned ID to the set with the given root."""
        if (self.Parent[ID] != UnionFind.NOSET):
            raise ValueError("ID %d is already part of a set" % ID)
        self.Parent[ID] = Root

    def Find(self, ID):
        #~ Not part of any set yet
        if (self.Parent[ID] == UnionFind.NOSET):
            return UnionFind.NOSET

        #~ Walk up to the root
        Root = ID
        while self.Parent[Root] != Root:
            Root = self.Parent[Root]

        #~ Path compression
        while self.Parent[ID] != Root:
            Next = self.Parent[ID]
            self.Parent[ID] = Root
            ID = Next

        return Root

    def Union(self, RootA, RootB, Representative):
        """
        Merges the two sets with the given roots.
        The merged set is represented by Representative.
        Returns the root of the merged set.
        """
        if (RootA == RootB):
            self.Representative[RootA] = Representative
            return RootA

        #~ Union by rank: the shallower tree goes below the deeper one
        if (self.Rank[RootA] < self.Rank[RootB]):
            RootA, RootB = RootB, RootA
        self.Parent[RootB] = RootA
        if (self.Rank[RootA] == self.Rank[RootB]):
            self.Rank[RootA] += 1

        self.Representative[RootA] = Representative
        self.Representative[RootB] = UnionFind.NOSET
        self.NumSets -= 1
        return RootA

    def GetRepresentative(self, ID):
        Root = self.Find(ID)
        if (Root == UnionFind.NOSET):
            return UnionFind.NOSET
        return self.Representative[Root]
